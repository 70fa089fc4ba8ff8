"""Mapping of registry device and twin records to DeviceEntity.

Records are the model objects returned by the Azure IoT Hub service SDK
(``Device`` and ``Twin``); only attribute access is used, so any object
with the same attribute names can be mapped.
"""

from typing import Any, Optional, Type

from .connection_context import RegistryConnectionContext
from .device_entity import DeviceEntity, DeviceConnectionState, DeviceStatus

GATEWAY_PORT = 8883


def _normalize(enum_cls: Type, value: Any) -> Optional[str]:
    """Canonical enum value for ``value``, or the raw string if unrecognized."""
    if value is None:
        return None
    try:
        return enum_cls(value).value
    except ValueError:
        return str(value)


class DeviceEntityMapper:
    """Converts raw registry records into DeviceEntity instances."""

    def __init__(self, context: RegistryConnectionContext):
        self.context = context

    def map_full(self, device) -> DeviceEntity:
        """Map a full device identity record, synthesizing its connection string."""
        authentication = getattr(device, 'authentication', None)
        symmetric_key = getattr(authentication, 'symmetric_key', None)
        thumbprint = getattr(authentication, 'x509_thumbprint', None)
        message_count = getattr(device, 'cloud_to_device_message_count', None)

        return DeviceEntity(
            id=device.device_id,
            primary_key=getattr(symmetric_key, 'primary_key', None),
            secondary_key=getattr(symmetric_key, 'secondary_key', None),
            primary_thumbprint=getattr(thumbprint, 'primary_thumbprint', None),
            secondary_thumbprint=getattr(thumbprint, 'secondary_thumbprint', None),
            connection_string=self.create_device_connection_string(device),
            connection_state=_normalize(DeviceConnectionState, getattr(device, 'connection_state', None)),
            last_activity_time=getattr(device, 'last_activity_time', None),
            last_connection_state_updated_time=getattr(device, 'connection_state_updated_time', None),
            last_state_updated_time=getattr(device, 'status_updated_time', None),
            message_count=message_count or 0,
            state=_normalize(DeviceStatus, getattr(device, 'status', None)),
            suspension_reason=getattr(device, 'status_reason', None),
        )

    def map_identity_only(self, twin) -> DeviceEntity:
        """Map a twin record from the bulk query path; only the id is kept."""
        return DeviceEntity(id=twin.device_id)

    def create_device_connection_string(self, device) -> str:
        """Build the device connection string.

        Segment order is fixed: HostName, DeviceId, credential, GatewayHostName.
        Any authentication record without a symmetric primary key is reported
        as ``x509=true``, whether or not thumbprints are set.
        """
        if not self.context.has_host_name:
            return ""

        connection_string = f"{self.context.host_name}DeviceId={device.device_id}"

        authentication = getattr(device, 'authentication', None)
        if authentication is not None:
            symmetric_key = getattr(authentication, 'symmetric_key', None)
            if symmetric_key is not None and symmetric_key.primary_key is not None:
                connection_string += f";SharedAccessKey={symmetric_key.primary_key}"
            else:
                connection_string += ";x509=true"

        if self.context.protocol_gateway_host:
            connection_string += f";GatewayHostName=ssl://{self.context.protocol_gateway_host}:{GATEWAY_PORT}"

        return connection_string
