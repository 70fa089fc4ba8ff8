#!/usr/bin/env python3
"""Script to run the HubExplorer API server.

This script launches the HubExplorer API server for exposing device
registry browsing through a REST API. It can be run directly as a script
or imported and called programmatically.
"""

import sys
import argparse
import logging

from hubexplorer.api.api_server import APIServer
from hubexplorer.core.settings import SettingsManager
from hubexplorer.error_handling import ConfigurationError


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Run the HubExplorer API server")

    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind the server to (default: api_host from settings)"
    )

    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to run the server on (default: api_port from settings)"
    )

    parser.add_argument(
        "--settings",
        dest="settings_file",
        default=None,
        help="Path to the settings file (default: ~/.hubexplorer/settings.json)"
    )

    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        default=None,
        help="Logging level (default: log_level from settings)"
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Run the API server."""
    args = parse_args(argv)

    try:
        settings = SettingsManager(args.settings_file).load()
        if args.host:
            settings.api_host = args.host
        if args.port:
            settings.api_port = args.port
        if args.log_level:
            settings.log_level = args.log_level.upper()
        settings.validate()
    except ConfigurationError as e:
        logging.error(f"Invalid settings: {e}")
        sys.exit(1)

    server = APIServer(settings=settings)

    try:
        server.run()
    except KeyboardInterrupt:
        logging.info("API server stopped by user")


if __name__ == "__main__":
    main()
