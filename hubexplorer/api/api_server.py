"""API Server for HubExplorer.

This module provides a FastAPI implementation exposing the device registry
client through a read-only REST API, for grid views and scripts that need
device lists and connection strings.
"""

import asyncio
import logging
import uvicorn
from typing import List, Optional
from fastapi import FastAPI, HTTPException, Query, Path
from fastapi.middleware.cors import CORSMiddleware
from datetime import datetime

from .models import DeviceEntityModel, DeviceIdListModel, ErrorEventModel, HealthModel

from ..core.logging_config import configure_logging
from ..core.settings import Settings
from ..device_management import DeviceRegistryClient
from ..error_handling import ErrorManager


class APIServer:
    """API Server for exposing HubExplorer functionality via REST endpoints."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[DeviceRegistryClient] = None,
        error_manager: Optional[ErrorManager] = None
    ):
        """Initialize the API server.

        Args:
            settings: Application settings; defaults are used when None
            client: Registry client to serve; created from settings on initialize() when None
            error_manager: Error manager shared with the client
        """
        self.settings = settings or Settings()
        self.host = self.settings.api_host
        self.port = self.settings.api_port
        self.log_level = self.settings.log_level.upper()
        self.error_manager = error_manager or ErrorManager()
        self.client = client

        # Initialize FastAPI application
        self.app = FastAPI(
            title="HubExplorer API",
            description="REST API for browsing devices in a device registry",
            version="1.0.0"
        )

        # Setup CORS
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["GET"],
            allow_headers=["*"],
        )

        # Setup routes
        self._setup_routes()

    async def initialize(self):
        """Set up logging and create the registry client if none was given."""
        configure_logging(self.settings.logging_settings())

        if self.client is None:
            self.client = DeviceRegistryClient.from_connection_string(
                self.settings.connection_string,
                max_device_count=self.settings.max_device_count,
                protocol_gateway_host=self.settings.protocol_gateway_host,
                error_manager=self.error_manager
            )

    def _get_client(self) -> DeviceRegistryClient:
        if self.client is None:
            raise HTTPException(status_code=503, detail="Registry client is not initialized")
        return self.client

    def _setup_routes(self):
        """Set up the API routes."""
        app = self.app

        # Health check
        @app.get("/health", response_model=HealthModel)
        async def health_check():
            """Check if the API server is running."""
            return HealthModel(
                status="ok",
                timestamp=datetime.now(),
                host_name=self.client.host_name if self.client else None
            )

        # Device routes
        @app.get("/devices", response_model=List[DeviceEntityModel])
        async def get_devices(max_count: Optional[int] = Query(None, ge=1, description="Maximum number of devices")):
            """Get full device records."""
            client = self._get_client()
            try:
                devices = await client.list_devices(max_count)
            except Exception as e:
                raise HTTPException(status_code=502, detail=str(e))
            return [DeviceEntityModel.from_entity(device) for device in devices]

        @app.get("/devices/ids", response_model=DeviceIdListModel)
        async def get_device_ids():
            """Get the ids of every device in the registry."""
            client = self._get_client()
            try:
                device_ids = await client.list_all_device_ids()
            except Exception as e:
                raise HTTPException(status_code=502, detail=str(e))
            return DeviceIdListModel(device_ids=device_ids, count=len(device_ids))

        @app.get("/devices/{device_id}", response_model=DeviceEntityModel)
        async def get_device(device_id: str = Path(..., description="Id of the device")):
            """Get a specific device by id."""
            client = self._get_client()
            try:
                device = await client.get_device_by_id(device_id)
            except Exception as e:
                raise HTTPException(status_code=502, detail=str(e))
            if device is None:
                raise HTTPException(status_code=404, detail=f"Device {device_id} not found")
            return DeviceEntityModel.from_entity(device)

        # Error routes
        @app.get("/errors", response_model=List[ErrorEventModel])
        async def get_errors():
            """Get recorded registry errors."""
            return self.error_manager.get_error_history()

    async def start(self):
        """Start the API server."""
        await self.initialize()

        # Run the server
        config = uvicorn.Config(
            app=self.app,
            host=self.host,
            port=self.port,
            log_level="debug" if self.log_level == "METRIC" else self.log_level.lower()
        )
        server = uvicorn.Server(config)
        await server.serve()

    def run(self):
        """Run the API server synchronously."""
        logging.getLogger("hubexplorer.api").info(f"Starting HubExplorer API server on {self.host}:{self.port}")
        asyncio.run(self.start())
