"""DeviceEntity class representing a device read from the registry.

Every retrieval from the registry produces fresh DeviceEntity instances;
the grid presentation relies on the column order in DEVICE_GRID_COLUMNS.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple, Any, Dict


class DeviceConnectionState(str, Enum):
    """Enumeration of device connection states reported by the registry."""
    CONNECTED = "Connected"
    DISCONNECTED = "Disconnected"

    @classmethod
    def _missing_(cls, value):
        """Handle case-insensitive lookup (the service reports lowercase)."""
        if isinstance(value, str):
            value = value.strip().lower()
            for member in cls:
                if member.value.lower() == value:
                    return member
        return None


class DeviceStatus(str, Enum):
    """Enumeration of device lifecycle states."""
    ENABLED = "Enabled"
    DISABLED = "Disabled"

    @classmethod
    def _missing_(cls, value):
        """Handle case-insensitive lookup (the service reports lowercase)."""
        if isinstance(value, str):
            value = value.strip().lower()
            for member in cls:
                if member.value.lower() == value:
                    return member
        return None


# (attribute, column header) pairs in display order
DEVICE_GRID_COLUMNS: Tuple[Tuple[str, str], ...] = (
    ('id', 'Id'),
    ('primary_key', 'PrimaryKey'),
    ('secondary_key', 'SecondaryKey'),
    ('primary_thumbprint', 'PrimaryThumbPrint'),
    ('secondary_thumbprint', 'SecondaryThumbPrint'),
    ('connection_string', 'ConnectionString'),
    ('connection_state', 'ConnectionState'),
    ('last_activity_time', 'LastActivityTime'),
    ('last_connection_state_updated_time', 'LastConnectionStateUpdatedTime'),
    ('last_state_updated_time', 'LastStateUpdatedTime'),
    ('message_count', 'MessageCount'),
    ('state', 'State'),
    ('suspension_reason', 'SuspensionReason'),
)


@dataclass
class DeviceEntity:
    """Normalized view of a device identity or twin record.

    Twin-only records (bulk enumeration) carry the id and nothing else.
    """
    id: str
    primary_key: Optional[str] = None
    secondary_key: Optional[str] = None
    primary_thumbprint: Optional[str] = None
    secondary_thumbprint: Optional[str] = None
    connection_string: str = ""
    connection_state: Optional[str] = None
    last_activity_time: Optional[datetime] = None
    last_connection_state_updated_time: Optional[datetime] = None
    last_state_updated_time: Optional[datetime] = None
    message_count: int = 0
    state: Optional[str] = None
    suspension_reason: Optional[str] = None

    def __lt__(self, other):
        if not isinstance(other, DeviceEntity):
            return NotImplemented
        return (self.id or "").lower() < (other.id or "").lower()

    def __str__(self):
        return (f"Device ID = {self.id}, Primary Key = {self.primary_key}, "
                f"Secondary Key = {self.secondary_key}, "
                f"Primary Thumbprint = {self.primary_thumbprint}, "
                f"Secondary Thumbprint = {self.secondary_thumbprint}, "
                f"ConnectionString = {self.connection_string}, "
                f"ConnState = {self.connection_state}, "
                f"ActivityTime = {self.last_activity_time}, "
                f"LastConnState = {self.last_connection_state_updated_time}, "
                f"LastStateUpdatedTime = {self.last_state_updated_time}, "
                f"MessageCount = {self.message_count}, State = {self.state}, "
                f"SuspensionReason = {self.suspension_reason}")

    def to_row(self) -> Tuple[Any, ...]:
        """Values in DEVICE_GRID_COLUMNS order."""
        return tuple(getattr(self, attribute) for attribute, _ in DEVICE_GRID_COLUMNS)

    def to_dict(self) -> Dict[str, Any]:
        """Convert entity to dictionary for serialization."""
        data = {}
        for attribute, _ in DEVICE_GRID_COLUMNS:
            value = getattr(self, attribute)
            data[attribute] = value.isoformat() if isinstance(value, datetime) else value
        return data
