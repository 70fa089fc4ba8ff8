"""HubExplorer - Device Registry Browser.

Retrieves device records from a device registry service, pages through
large registries and derives a connection string for every device.
"""

from .device_management import (
    DeviceEntity, DeviceRegistryClient, DeviceEntityMapper,
    RegistryConnectionContext, extract_host_name, sample_devices
)
from .error_handling import ErrorManager, ConfigurationError, DeviceExplorerError
from .core.logging_config import LoggingManager, MetricLogger
from .core.settings import Settings, SettingsManager

__version__ = '1.0.0'

__all__ = [
    'DeviceEntity', 'DeviceRegistryClient', 'DeviceEntityMapper',
    'RegistryConnectionContext', 'extract_host_name', 'sample_devices',
    'ErrorManager', 'ConfigurationError', 'DeviceExplorerError',
    'LoggingManager', 'MetricLogger', 'Settings', 'SettingsManager'
]
