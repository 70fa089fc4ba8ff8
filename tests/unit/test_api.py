"""Tests for the REST API routes."""

import pytest
from fastapi.testclient import TestClient

from hubexplorer.api.api_server import APIServer
from hubexplorer.api.models import DeviceEntityModel
from hubexplorer.core.settings import Settings
from tests.utils.test_utils import make_device, make_twin


@pytest.fixture
def api(client, error_manager):
    server = APIServer(settings=Settings(), client=client, error_manager=error_manager)
    return TestClient(server.app)


def test_health(api):
    response = api.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body['status'] == "ok"
    assert body['host_name'] == "HostName=testhub.azure-devices.net;"


def test_get_devices(api, fake_service):
    fake_service.devices = [make_device("dev1", primary_key="K1"), make_device("dev2", primary_key="K2")]

    response = api.get("/devices", params={"max_count": 2})

    assert response.status_code == 200
    body = response.json()
    assert [d['id'] for d in body] == ["dev1", "dev2"]
    assert body[0]['connection_string'] == \
        "HostName=testhub.azure-devices.net;DeviceId=dev1;SharedAccessKey=K1"
    assert body[0]['state'] == "Enabled"
    assert fake_service.calls_to('get_devices') == [('get_devices', 2)]


def test_get_devices_rejects_non_positive_count(api):
    assert api.get("/devices", params={"max_count": 0}).status_code == 422


def test_get_device_ids(api, fake_service):
    fake_service.twin_pages = [[make_twin("d1"), make_twin("d2")], [make_twin("d3")]]

    response = api.get("/devices/ids")

    assert response.status_code == 200
    assert response.json() == {'device_ids': ["d1", "d2", "d3"], 'count': 3}


def test_get_device(api, fake_service):
    fake_service.device_lookup["dev1"] = make_device("dev1", primary_thumbprint="T1")

    response = api.get("/devices/dev1")

    assert response.status_code == 200
    assert response.json()['connection_string'] == \
        "HostName=testhub.azure-devices.net;DeviceId=dev1;x509=true"


def test_get_device_not_found(api):
    response = api.get("/devices/missing")
    assert response.status_code == 404
    assert "missing" in response.json()['detail']


def test_registry_failure_maps_to_bad_gateway(api, fake_service):
    fake_service.get_devices_error = ConnectionError("registry unreachable")

    response = api.get("/devices")

    assert response.status_code == 502
    assert response.json()['detail'] == "registry unreachable"

    errors = api.get("/errors").json()
    assert len(errors) == 1
    assert errors[0]['category'] == "transport"
    assert errors[0]['operation'] == "list_devices"


def test_routes_without_client_report_unavailable():
    server = APIServer(settings=Settings())
    api = TestClient(server.app)
    assert api.get("/devices").status_code == 503
    assert api.get("/health").json()['host_name'] is None


def test_device_model_schema_has_example():
    schema = DeviceEntityModel.model_json_schema()
    assert schema['example']['id'] == "thermostat-01"
