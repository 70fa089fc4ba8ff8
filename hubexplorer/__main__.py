"""
HubExplorer command line entry point.

Prints devices from the device registry as JSON, or starts the REST API.
"""

import sys
import json
import asyncio
import argparse
import logging

from .core.logging_config import configure_logging
from .core.settings import SettingsManager
from .device_management import DeviceRegistryClient, sample_devices
from .error_handling import ConfigurationError, ErrorManager


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(prog="hubexplorer", description="Browse devices in a device registry")

    parser.add_argument("--settings", dest="settings_file", default=None,
                        help="Path to the settings file (default: ~/.hubexplorer/settings.json)")
    parser.add_argument("--connection-string", default=None,
                        help="Registry service connection string (overrides settings)")
    parser.add_argument("--gateway", dest="protocol_gateway_host", default=None,
                        help="Protocol gateway host name (overrides settings)")
    parser.add_argument("--sample", action="store_true",
                        help="Use built-in sample devices instead of a live registry")

    subparsers = parser.add_subparsers(dest="command", required=True)

    devices_parser = subparsers.add_parser("devices", help="List full device records")
    devices_parser.add_argument("--max-count", type=positive_int, default=None,
                                help="Maximum number of devices to retrieve")

    subparsers.add_parser("ids", help="List the ids of all devices")

    device_parser = subparsers.add_parser("device", help="Show a single device")
    device_parser.add_argument("device_id", help="Id of the device")

    subparsers.add_parser("serve", help="Run the REST API server")

    return parser


async def run_command(args, client) -> int:
    """Run a data command against a registry client and print JSON.

    Returns:
        int: Process exit code
    """
    if args.command == "devices":
        devices = await client.list_devices(args.max_count)
        print(json.dumps([device.to_dict() for device in devices], indent=2))
    elif args.command == "ids":
        print(json.dumps(await client.list_all_device_ids(), indent=2))
    elif args.command == "device":
        device = await client.get_device_by_id(args.device_id)
        if device is None:
            print(f"Device {args.device_id} not found", file=sys.stderr)
            return 1
        print(json.dumps(device.to_dict(), indent=2))
    return 0


def _run_sample(args) -> int:
    devices = sample_devices()
    if args.command == "devices":
        limit = args.max_count if args.max_count is not None else len(devices)
        print(json.dumps([device.to_dict() for device in devices[:limit]], indent=2))
    elif args.command == "ids":
        print(json.dumps([device.id for device in devices], indent=2))
    elif args.command == "device":
        matches = [device for device in devices if device.id == args.device_id]
        if not matches:
            print(f"Device {args.device_id} not found", file=sys.stderr)
            return 1
        print(json.dumps(matches[0].to_dict(), indent=2))
    return 0


def main(argv=None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = SettingsManager(args.settings_file).load()
        if args.connection_string is not None:
            settings.connection_string = args.connection_string
        if args.protocol_gateway_host is not None:
            settings.protocol_gateway_host = args.protocol_gateway_host
        settings.validate()
    except ConfigurationError as e:
        print(f"Invalid settings: {e}", file=sys.stderr)
        return 1

    configure_logging(settings.logging_settings())

    if args.sample and args.command != "serve":
        return _run_sample(args)

    if not settings.connection_string:
        print("No connection string configured; use --connection-string or the settings file",
              file=sys.stderr)
        return 1

    error_manager = ErrorManager()
    try:
        client = DeviceRegistryClient.from_connection_string(
            settings.connection_string,
            max_device_count=settings.max_device_count,
            protocol_gateway_host=settings.protocol_gateway_host,
            error_manager=error_manager
        )
    except ConfigurationError as e:
        print(f"Cannot connect to registry: {e}", file=sys.stderr)
        return 1

    if args.command == "serve":
        from .api.api_server import APIServer
        APIServer(settings=settings, client=client, error_manager=error_manager).run()
        return 0

    logging.getLogger("hubexplorer").debug(f"Running command {args.command}")
    return asyncio.run(run_command(args, client))


if __name__ == '__main__':
    sys.exit(main())
