"""DeviceRegistryClient for reading devices from the device registry.

This module provides paged enumeration of device ids, bulk retrieval of
full device records and single-device lookup. Every public operation
returns freshly built entities; the only state shared between calls is
the immutable RegistryConnectionContext.
"""

from typing import List, Optional, Any
import asyncio
import functools

from msrest.exceptions import HttpOperationError

from ..core.logging_config import MetricLogger, get_logger
from ..error_handling import ErrorManager, ErrorCategory, ErrorSeverity
from .connection_context import RegistryConnectionContext
from .device_entity import DeviceEntity
from .device_mapper import DeviceEntityMapper
from .iothub_service import IoTHubRegistryService

logger = get_logger("registry_client")

DEVICE_QUERY = "SELECT * FROM devices"


def _call_capturing(func, *args):
    """Run ``func`` and hand back either its result or the exception it raised."""
    try:
        return func(*args), None
    except Exception as e:
        return None, e


async def _run_blocking(func, *args):
    # The executor future rewraps some exceptions (e.g. TimeoutError) in new
    # instances; re-raise the worker's own object instead.
    loop = asyncio.get_event_loop()
    result, error = await loop.run_in_executor(None, functools.partial(_call_capturing, func, *args))
    if error is not None:
        raise error
    return result


class TwinQuery:
    """Cursor over the pages of a registry twin query.

    Pages must be fetched one after another; the cursor is not safe to
    advance from concurrent tasks.
    """

    def __init__(self, service, query: str = DEVICE_QUERY, page_size: Optional[int] = None,
                 metric_logger: Optional[MetricLogger] = None):
        self.service = service
        self.query = query
        self.page_size = page_size
        self.metric_logger = metric_logger or MetricLogger()
        self._continuation_token = None
        self._has_more_results = True
        self.pages_fetched = 0

    @property
    def has_more_results(self) -> bool:
        return self._has_more_results

    async def get_next_as_twins(self) -> List[Any]:
        """Fetch the next page of twin records.

        Returns:
            List of twin records; empty once the query is exhausted
        """
        if not self._has_more_results:
            return []

        timer_id = self.metric_logger.start_timer("query_twins", f"page {self.pages_fetched + 1}")
        try:
            items, token = await _run_blocking(
                self.service.query_twins, self.query, self._continuation_token, self.page_size
            )
        except Exception:
            self.metric_logger.end_timer(timer_id, status="failed")
            raise

        self.pages_fetched += 1
        self._continuation_token = token
        self._has_more_results = bool(token)
        self.metric_logger.end_timer(timer_id, details={'items': len(items)})
        return list(items)


class DeviceRegistryClient:
    """Reads device identities from the registry and maps them to DeviceEntity."""

    def __init__(self, context: RegistryConnectionContext, service,
                 error_manager: Optional[ErrorManager] = None,
                 metric_logger: Optional[MetricLogger] = None):
        """Initialize the client.

        Args:
            context: Connection parameters for this session
            service: Registry service exposing get_devices, query_twins and get_device
            error_manager: Optional ErrorManager that records failures
            metric_logger: Optional MetricLogger used to time service calls
        """
        self.context = context
        self.service = service
        self.error_manager = error_manager
        self.metric_logger = metric_logger or MetricLogger()
        self.mapper = DeviceEntityMapper(context)

        if not context.has_host_name:
            message = "Connection string has no HostName; device connection strings will be empty"
            logger.warning(message)
            if self.error_manager:
                self.error_manager.handle_error(
                    ErrorCategory.MALFORMED_INPUT, ErrorSeverity.MEDIUM, message,
                    operation="create_client"
                )

    @classmethod
    def from_connection_string(cls, connection_string: str, max_device_count: int = 1000,
                               protocol_gateway_host: str = "", **kwargs) -> 'DeviceRegistryClient':
        """Create a client backed by the Azure IoT Hub service SDK."""
        context = RegistryConnectionContext(
            connection_string=connection_string,
            max_device_count=max_device_count,
            protocol_gateway_host=protocol_gateway_host
        )
        service = IoTHubRegistryService.from_connection_string(connection_string)
        return cls(context, service, **kwargs)

    @property
    def host_name(self) -> Optional[str]:
        return self.context.host_name

    def create_query(self, query: str = DEVICE_QUERY) -> TwinQuery:
        return TwinQuery(self.service, query, self.context.max_device_count, self.metric_logger)

    async def list_devices(self, max_count: Optional[int] = None) -> List[DeviceEntity]:
        """Get up to ``max_count`` full device records in one call.

        The service caps how many identities a single call returns, so the
        result may be shorter than requested.

        Args:
            max_count: Maximum number of devices; defaults to the context's max_device_count

        Returns:
            List[DeviceEntity]: Mapped devices in service order
        """
        count = max_count if max_count is not None else self.context.max_device_count
        timer_id = self.metric_logger.start_timer("get_devices")
        try:
            devices = await _run_blocking(self.service.get_devices, count)
        except Exception as e:
            self.metric_logger.end_timer(timer_id, status="failed")
            self._report_transport_failure("list_devices", e)
            raise

        entities = [self.mapper.map_full(device) for device in devices or []]
        self.metric_logger.end_timer(timer_id, details={'devices': len(entities)})
        logger.info(f"Retrieved {len(entities)} devices (requested {count})")
        return entities

    async def list_all_devices(self) -> List[DeviceEntity]:
        """Enumerate every device through the paged twin query.

        Only the id of each device is populated; fetching full identity
        records for every device is too slow for large registries.
        """
        query = self.create_query()
        entities = []
        try:
            while query.has_more_results:
                batch = await query.get_next_as_twins()
                entities.extend(self.mapper.map_identity_only(twin) for twin in batch)
        except Exception as e:
            self._report_transport_failure("list_all_devices", e)
            raise

        logger.info(f"Enumerated {len(entities)} devices in {query.pages_fetched} pages")
        return entities

    async def list_all_device_ids(self) -> List[str]:
        """Get the ids of all devices in the registry, in query order."""
        return [entity.id for entity in await self.list_all_devices()]

    async def get_device_by_id(self, device_id: str) -> Optional[DeviceEntity]:
        """Get a single device.

        Returns:
            DeviceEntity, or None if the registry has no such device
        """
        timer_id = self.metric_logger.start_timer("get_device", device_id)
        try:
            device = await _run_blocking(self.service.get_device, device_id)
        except HttpOperationError as e:
            if _status_code(e) == 404:
                self.metric_logger.end_timer(timer_id, status="not_found")
                self._report_not_found(device_id)
                return None
            self.metric_logger.end_timer(timer_id, status="failed")
            self._report_transport_failure("get_device_by_id", e)
            raise
        except Exception as e:
            self.metric_logger.end_timer(timer_id, status="failed")
            self._report_transport_failure("get_device_by_id", e)
            raise

        if device is None:
            self.metric_logger.end_timer(timer_id, status="not_found")
            self._report_not_found(device_id)
            return None

        self.metric_logger.end_timer(timer_id)
        return self.mapper.map_full(device)

    def _report_not_found(self, device_id: str) -> None:
        logger.info(f"Device {device_id} not found")
        if self.error_manager:
            self.error_manager.handle_error(
                ErrorCategory.NOT_FOUND, ErrorSeverity.LOW,
                f"Device {device_id} not found", {'device_id': device_id},
                operation="get_device_by_id"
            )

    def _report_transport_failure(self, operation: str, error: Exception) -> None:
        logger.error(f"Registry call {operation} failed: {error}")
        if self.error_manager:
            self.error_manager.handle_error(
                ErrorCategory.TRANSPORT, ErrorSeverity.HIGH, str(error),
                {'exception': type(error).__name__}, operation=operation
            )


def _status_code(error: HttpOperationError) -> Optional[int]:
    response = getattr(error, 'response', None)
    return getattr(response, 'status_code', None)


def sample_devices() -> List[DeviceEntity]:
    """Fixed device list for running without a live registry."""
    return [
        DeviceEntity(id=f"TestDevice0{n}", primary_key=f"TestPrimKey0{n}",
                     secondary_key=f"TestSecKey0{n}")
        for n in range(1, 6)
    ]
