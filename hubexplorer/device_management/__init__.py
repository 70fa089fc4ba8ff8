"""Device Management Module for HubExplorer.

This module handles retrieval of device identities from the device registry,
normalization of registry records and synthesis of device connection strings.
"""

from .device_entity import DeviceEntity, DeviceConnectionState, DeviceStatus, DEVICE_GRID_COLUMNS
from .connection_context import RegistryConnectionContext, extract_host_name
from .device_mapper import DeviceEntityMapper
from .iothub_service import IoTHubRegistryService
from .registry_client import DeviceRegistryClient, TwinQuery, sample_devices, DEVICE_QUERY

__all__ = [
    'DeviceEntity', 'DeviceConnectionState', 'DeviceStatus', 'DEVICE_GRID_COLUMNS',
    'RegistryConnectionContext', 'extract_host_name', 'DeviceEntityMapper',
    'IoTHubRegistryService', 'DeviceRegistryClient', 'TwinQuery', 'sample_devices',
    'DEVICE_QUERY'
]
