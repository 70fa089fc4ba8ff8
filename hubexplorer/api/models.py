"""Data models for the HubExplorer REST API.

This module defines Pydantic models that represent the data structures
returned by the HubExplorer REST API.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional, Any
from datetime import datetime

from ..device_management import DeviceEntity, DEVICE_GRID_COLUMNS


class DeviceEntityModel(BaseModel):
    """Model representing a device read from the registry."""
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

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "id": "thermostat-01",
            "primary_key": "c2VjcmV0LXByaW1hcnk=",
            "secondary_key": "c2VjcmV0LXNlY29uZGFyeQ==",
            "primary_thumbprint": None,
            "secondary_thumbprint": None,
            "connection_string": "HostName=myhub.azure-devices.net;DeviceId=thermostat-01;"
                                 "SharedAccessKey=c2VjcmV0LXByaW1hcnk=",
            "connection_state": "Connected",
            "last_activity_time": "2024-03-01T10:15:00",
            "last_connection_state_updated_time": "2024-03-01T09:00:00",
            "last_state_updated_time": "2024-02-01T00:00:00",
            "message_count": 3,
            "state": "Enabled",
            "suspension_reason": None
        }
    })

    @classmethod
    def from_entity(cls, entity: DeviceEntity) -> 'DeviceEntityModel':
        return cls(**{attribute: getattr(entity, attribute) for attribute, _ in DEVICE_GRID_COLUMNS})


class DeviceIdListModel(BaseModel):
    """Model representing the ids of every device in the registry."""
    device_ids: List[str] = Field(default_factory=list)
    count: int = 0


class ErrorEventModel(BaseModel):
    """Model representing a recorded error event."""
    id: Optional[str] = None
    timestamp: datetime
    category: str
    severity: int
    message: str
    details: Optional[Dict[str, Any]] = None
    operation: Optional[str] = None
    resolved: bool = False


class HealthModel(BaseModel):
    """Model representing the API health check."""
    status: str
    timestamp: datetime
    host_name: Optional[str] = None
