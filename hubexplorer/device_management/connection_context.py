"""Connection context shared by the registry client and entity mapper."""

from dataclasses import dataclass, field
from typing import Optional

from ..error_handling import ConfigurationError

HOST_NAME_KEY = "HostName"


def extract_host_name(connection_string: Optional[str]) -> Optional[str]:
    """Return the ``HostName=<host>;`` fragment of a service connection string.

    The connection string is a ``;`` separated list of ``key=value`` tokens.
    The first token whose key is exactly ``HostName`` wins; tokens without
    ``=`` never match. Returns None when there is no such token.
    """
    if not connection_string:
        return None

    for token in connection_string.split(';'):
        if token.split('=')[0] == HOST_NAME_KEY:
            return token + ';'

    return None


@dataclass(frozen=True)
class RegistryConnectionContext:
    """Immutable per-session connection parameters.

    ``host_name`` is derived from ``connection_string`` once, at creation.
    """
    connection_string: str
    max_device_count: int = 1000
    protocol_gateway_host: str = ""
    host_name: Optional[str] = field(init=False, default=None)

    def __post_init__(self):
        if not isinstance(self.max_device_count, int) or isinstance(self.max_device_count, bool) \
                or self.max_device_count < 1:
            raise ConfigurationError(
                f"max_device_count must be a positive integer, got {self.max_device_count!r}")
        if self.protocol_gateway_host is None:
            object.__setattr__(self, 'protocol_gateway_host', "")
        object.__setattr__(self, 'host_name', extract_host_name(self.connection_string))

    @property
    def has_host_name(self) -> bool:
        return bool(self.host_name and self.host_name.strip())
