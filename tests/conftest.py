import pytest
import os
import sys

# Ensure proper path setup
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from hubexplorer.core.logging_config import logging_manager
from hubexplorer.device_management import RegistryConnectionContext, DeviceRegistryClient
from hubexplorer.error_handling import ErrorManager
from tests.utils.test_utils import FakeRegistryService

HUB_CONNECTION_STRING = (
    "HostName=testhub.azure-devices.net;SharedAccessKeyName=iothubowner;"
    "SharedAccessKey=c2VydmljZS1rZXk="
)


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo any logging configuration made by a test."""
    yield
    logging_manager.reset()


@pytest.fixture
def context():
    return RegistryConnectionContext(connection_string=HUB_CONNECTION_STRING, max_device_count=100)


@pytest.fixture
def fake_service():
    return FakeRegistryService()


@pytest.fixture
def error_manager():
    return ErrorManager()


@pytest.fixture
def client(context, fake_service, error_manager):
    return DeviceRegistryClient(context, fake_service, error_manager=error_manager)


@pytest.fixture
def settings_file(tmp_path):
    """Path to a settings file that keeps logs out of the home directory."""
    path = tmp_path / "settings.json"
    path.write_text(
        '{"connection_string": "", "console_logging": false, "file_logging": false}'
    )
    return str(path)
