"""REST API module for HubExplorer.

This module provides a FastAPI-based REST interface for reading devices
from the device registry.
"""

from .api_server import APIServer
from .models import DeviceEntityModel, DeviceIdListModel, ErrorEventModel, HealthModel

__all__ = [
    'APIServer',
    'DeviceEntityModel', 'DeviceIdListModel', 'ErrorEventModel', 'HealthModel'
]
