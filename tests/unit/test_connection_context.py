"""Unit tests for host name extraction and the connection context."""

import dataclasses

import pytest
from hubexplorer.device_management.connection_context import (
    RegistryConnectionContext,
    extract_host_name
)
from hubexplorer.error_handling import ConfigurationError


@pytest.mark.parametrize("connection_string", [
    "HostName=h1;SharedAccessKeyName=owner;SharedAccessKey=abc",
    "SharedAccessKeyName=owner;HostName=h1;SharedAccessKey=abc",
    "SharedAccessKeyName=owner;SharedAccessKey=abc;HostName=h1",
    "garbage;HostName=h1;;also-garbage",
    "HostName=h1",
])
def test_extract_host_name_any_position(connection_string):
    assert extract_host_name(connection_string) == "HostName=h1;"


@pytest.mark.parametrize("connection_string", [
    "SharedAccessKeyName=owner;SharedAccessKey=abc",
    "hostname=h1;SharedAccessKey=abc",
    " HostName=h1;SharedAccessKey=abc",
    "no-equals-sign-anywhere",
    ";;;",
    "",
    None,
])
def test_extract_host_name_absent(connection_string):
    assert extract_host_name(connection_string) is None


def test_extract_host_name_first_match_wins():
    assert extract_host_name("HostName=first;HostName=second") == "HostName=first;"


def test_extract_host_name_keeps_whole_token():
    # Only the key is compared; the value is copied verbatim
    assert extract_host_name("HostName=a=b;SharedAccessKey=k") == "HostName=a=b;"


def test_context_computes_host_name_on_creation():
    context = RegistryConnectionContext("HostName=hub.example.net;SharedAccessKey=k")
    assert context.host_name == "HostName=hub.example.net;"
    assert context.has_host_name
    assert context.max_device_count == 1000
    assert context.protocol_gateway_host == ""


def test_context_without_host_name():
    context = RegistryConnectionContext("SharedAccessKey=k")
    assert context.host_name is None
    assert not context.has_host_name


def test_context_is_immutable():
    context = RegistryConnectionContext("HostName=h1")
    with pytest.raises(dataclasses.FrozenInstanceError):
        context.protocol_gateway_host = "gw1"
    with pytest.raises(TypeError):
        RegistryConnectionContext("HostName=h1", host_name="HostName=other;")


def test_context_normalizes_missing_gateway():
    context = RegistryConnectionContext("HostName=h1", protocol_gateway_host=None)
    assert context.protocol_gateway_host == ""


@pytest.mark.parametrize("max_device_count", [0, -5, "100", True])
def test_context_rejects_invalid_max_count(max_device_count):
    with pytest.raises(ConfigurationError):
        RegistryConnectionContext("HostName=h1", max_device_count=max_device_count)
