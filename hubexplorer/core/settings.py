"""Application settings for HubExplorer.

Settings live in a JSON file (``~/.hubexplorer/settings.json`` by default).
Command line options override values loaded from the file.
"""

import os
import json
import logging
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional

from ..error_handling import ConfigurationError

DEFAULT_SETTINGS_FILE = "~/.hubexplorer/settings.json"
VALID_LOG_LEVELS = ('DEBUG', 'METRIC', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass
class Settings:
    """Settings for connecting to the device registry."""
    connection_string: str = ""
    max_device_count: int = 1000
    protocol_gateway_host: str = ""
    log_level: str = "INFO"
    console_logging: bool = True
    file_logging: bool = True
    log_dir: str = "~/.hubexplorer/logs"
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Settings':
        """Create settings from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def logging_settings(self) -> Dict[str, Any]:
        """Subset of the settings understood by LoggingManager.configure()."""
        return {
            'log_level': self.log_level,
            'console_logging': self.console_logging,
            'file_logging': self.file_logging,
            'log_dir': self.log_dir
        }

    def validate(self) -> None:
        """Check the settings for values the client cannot work with.

        Raises:
            ConfigurationError: If a value is out of range
        """
        if not isinstance(self.max_device_count, int) or isinstance(self.max_device_count, bool) \
                or self.max_device_count < 1:
            raise ConfigurationError(
                f"max_device_count must be a positive integer, got {self.max_device_count!r}")
        if str(self.log_level).upper() not in VALID_LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level: {self.log_level}")
        if not isinstance(self.api_port, int) or isinstance(self.api_port, bool) \
                or not 1 <= self.api_port <= 65535:
            raise ConfigurationError(f"api_port must be an integer in 1-65535, got {self.api_port!r}")


class SettingsManager:
    """Loads and saves the settings file."""

    def __init__(self, settings_file: Optional[str] = None):
        self.settings_file = os.path.expanduser(settings_file or DEFAULT_SETTINGS_FILE)

    def load(self) -> Settings:
        """Load settings from disk.

        Returns:
            Settings: Loaded settings, or defaults when no file exists

        Raises:
            ConfigurationError: If the file is not a JSON object
        """
        if not os.path.exists(self.settings_file):
            logging.info(f"No settings file found at {self.settings_file}. Using defaults.")
            return Settings()

        with open(self.settings_file, 'r') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Invalid JSON in settings file {self.settings_file}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Settings file {self.settings_file} must contain a JSON object")

        return Settings.from_dict(data)

    def save(self, settings: Settings) -> None:
        """Save settings to disk."""
        settings_dir = os.path.dirname(self.settings_file)
        if settings_dir:
            os.makedirs(settings_dir, exist_ok=True)
        with open(self.settings_file, 'w') as f:
            json.dump(settings.to_dict(), f, indent=4)
        logging.info(f"Saved settings to {self.settings_file}")

    def update(self, **changes) -> Settings:
        """Apply changes to the stored settings and save them.

        Returns:
            Settings: The updated settings
        """
        data = self.load().to_dict()
        data.update(changes)
        settings = Settings.from_dict(data)
        settings.validate()
        self.save(settings)
        return settings
