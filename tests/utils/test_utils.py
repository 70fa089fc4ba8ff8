import threading
from types import SimpleNamespace
from typing import Dict, List, Optional

from msrest.exceptions import HttpOperationError


def make_device(device_id: str, primary_key: Optional[str] = None, secondary_key: Optional[str] = None,
                primary_thumbprint: Optional[str] = None, secondary_thumbprint: Optional[str] = None,
                with_authentication: bool = True, with_symmetric_key: bool = True, **fields):
    """Build a record shaped like the SDK's Device model."""
    authentication = None
    if with_authentication:
        symmetric_key = None
        if with_symmetric_key:
            symmetric_key = SimpleNamespace(primary_key=primary_key, secondary_key=secondary_key)
        authentication = SimpleNamespace(
            symmetric_key=symmetric_key,
            x509_thumbprint=SimpleNamespace(
                primary_thumbprint=primary_thumbprint,
                secondary_thumbprint=secondary_thumbprint
            )
        )

    record = {
        'device_id': device_id,
        'authentication': authentication,
        'connection_state': 'disconnected',
        'connection_state_updated_time': None,
        'status': 'enabled',
        'status_reason': None,
        'status_updated_time': None,
        'last_activity_time': None,
        'cloud_to_device_message_count': 0,
    }
    record.update(fields)
    return SimpleNamespace(**record)


def make_twin(device_id: str):
    """Build a record shaped like the SDK's Twin model."""
    return SimpleNamespace(device_id=device_id, etag='AAAAAAAAAAE=', status='enabled')


def http_error(status_code: int) -> HttpOperationError:
    """HttpOperationError carrying only a response status, as raised by the SDK."""
    error = HttpOperationError.__new__(HttpOperationError)
    error.message = f"Operation returned an invalid status code {status_code}"
    error.args = (error.message,)
    error.inner_exception = None
    error.response = SimpleNamespace(status_code=status_code, reason="")
    error.error = None
    return error


class FakeRegistryService:
    """In-memory stand-in for IoTHubRegistryService that records every call."""

    def __init__(self, devices: Optional[List] = None, twin_pages: Optional[List[List]] = None):
        self.devices = list(devices or [])
        self.twin_pages = [list(page) for page in (twin_pages or [[]])]
        self.device_lookup: Dict[str, object] = {}
        self.get_devices_error: Optional[Exception] = None
        self.query_error: Optional[Exception] = None
        self.query_error_on_page: Optional[int] = None
        self.get_device_error: Optional[Exception] = None
        self.return_none_for_devices = False
        self.calls: List[tuple] = []
        self._lock = threading.Lock()

    def _record(self, *call):
        with self._lock:
            self.calls.append(call)

    def calls_to(self, name: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == name]

    def get_devices(self, max_count=None):
        self._record('get_devices', max_count)
        if self.get_devices_error:
            raise self.get_devices_error
        if self.return_none_for_devices:
            return None
        return self.devices[:max_count] if max_count is not None else list(self.devices)

    def query_twins(self, query, continuation_token=None, page_size=None):
        self._record('query_twins', query, continuation_token, page_size)
        page_index = 0 if continuation_token is None else int(continuation_token.split('-')[1])
        if self.query_error and (self.query_error_on_page is None or self.query_error_on_page == page_index):
            raise self.query_error
        items = self.twin_pages[page_index]
        next_token = f"page-{page_index + 1}" if page_index + 1 < len(self.twin_pages) else None
        return list(items), next_token

    def get_device(self, device_id):
        self._record('get_device', device_id)
        if self.get_device_error:
            raise self.get_device_error
        if device_id not in self.device_lookup:
            raise http_error(404)
        return self.device_lookup[device_id]
