"""Adapter over the Azure IoT Hub registry manager.

The SDK calls are blocking; DeviceRegistryClient runs them in an executor.
The SDK is imported lazily so the rest of the package works without the
``azure`` extra installed.
"""

from typing import Any, List, Optional, Tuple

from ..core.logging_config import get_logger
from ..error_handling import ConfigurationError

logger = get_logger("iothub_service")


class IoTHubRegistryService:
    """Thin wrapper around ``azure.iot.hub.IoTHubRegistryManager``."""

    def __init__(self, registry_manager):
        self.registry_manager = registry_manager

    @classmethod
    def from_connection_string(cls, connection_string: str) -> 'IoTHubRegistryService':
        try:
            from azure.iot.hub import IoTHubRegistryManager
        except ImportError as e:
            raise ConfigurationError(
                "azure-iot-hub is not installed; install the 'azure' extra to connect to a registry"
            ) from e

        logger.debug("Creating IoT Hub registry manager from connection string")
        try:
            registry_manager = IoTHubRegistryManager.from_connection_string(connection_string)
        except ValueError as e:
            raise ConfigurationError(f"Invalid registry connection string: {e}") from e
        return cls(registry_manager)

    def get_devices(self, max_count: Optional[int] = None) -> List[Any]:
        return self.registry_manager.get_devices(max_count)

    def query_twins(self, query: str, continuation_token: Optional[str] = None,
                    page_size: Optional[int] = None) -> Tuple[List[Any], Optional[str]]:
        """Run one page of a registry query.

        Returns:
            Tuple of (twin records, continuation token or None when exhausted)
        """
        from azure.iot.hub.models import QuerySpecification

        result = self.registry_manager.query_iot_hub(
            QuerySpecification(query=query), continuation_token, page_size
        )
        return list(result.items or []), result.continuation_token

    def get_device(self, device_id: str) -> Any:
        return self.registry_manager.get_device(device_id)
