"""Logging configuration for HubExplorer.

This module provides console and rotating file logging plus a lightweight
metric logger used to time calls against the device registry service.
"""

import os
import sys
import logging
import logging.handlers
import itertools
import threading
import time
from typing import Dict, Any, Optional

# Custom log levels
METRIC = 15  # Between DEBUG and INFO

logging.addLevelName(METRIC, "METRIC")

DEFAULT_LOG_DIR = "~/.hubexplorer/logs"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module.

    Args:
        name: Module name

    Returns:
        logging.Logger: Logger instance
    """
    return logging.getLogger(f"hubexplorer.{name}")


class MetricLogger:
    """Logger for registry call durations."""

    def __init__(self):
        self.logger = get_logger("metrics")
        self._timers = {}
        self._lock = threading.Lock()
        self._sequence = itertools.count(1)

    def start_timer(self, operation: str, target: Optional[str] = None) -> str:
        """Start a timer for an operation.

        Args:
            operation: Name of the operation
            target: Optional target of the operation (e.g. a device id)

        Returns:
            str: Timer ID
        """
        with self._lock:
            timer_id = f"{operation}_{target}_{next(self._sequence)}"
            self._timers[timer_id] = {
                'start_time': time.monotonic(),
                'operation': operation,
                'target': target
            }
        return timer_id

    def end_timer(self, timer_id: str, status: str = "success",
                  details: Optional[Dict] = None) -> Optional[int]:
        """End a timer and log the metric.

        Args:
            timer_id: Timer ID returned from start_timer
            status: Status of the operation
            details: Additional details

        Returns:
            int: Duration in milliseconds, or None for an unknown timer
        """
        with self._lock:
            timer_data = self._timers.pop(timer_id, None)

        if timer_data is None:
            self.logger.warning(f"Timer {timer_id} not found")
            return None

        duration_ms = int((time.monotonic() - timer_data['start_time']) * 1000)
        metric_msg = f"METRIC: {timer_data['operation']} took {duration_ms}ms ({status})"
        if timer_data['target']:
            metric_msg += f" on {timer_data['target']}"
        if details:
            metric_msg += f" - {details}"

        self.logger.log(METRIC, metric_msg)
        return duration_ms


class LoggingManager:
    """Manages logging configuration for the application."""

    def __init__(self):
        """Initialize the logging manager."""
        self._configured = False
        self.log_dir = os.path.expanduser(DEFAULT_LOG_DIR)
        self.max_file_size = 10 * 1024 * 1024  # 10 MB
        self.backup_count = 5
        self.log_level = logging.INFO
        self.console_logging = True
        self.file_logging = True
        self.handlers = []

    def configure(self, settings: Optional[Dict[str, Any]] = None):
        """Configure logging with the specified settings.

        Args:
            settings: Dictionary containing logging settings. If None, default settings are used.
        """
        if self._configured:
            return

        if settings:
            self._apply_settings(settings)

        app_logger = logging.getLogger("hubexplorer")
        app_logger.setLevel(self.log_level)

        if self.console_logging:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            app_logger.addHandler(console_handler)
            self.handlers.append(console_handler)

        if self.file_logging:
            os.makedirs(self.log_dir, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                os.path.join(self.log_dir, "hubexplorer.log"),
                maxBytes=self.max_file_size,
                backupCount=self.backup_count
            )
            file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
            app_logger.addHandler(file_handler)
            self.handlers.append(file_handler)

        self._configured = True
        app_logger.info(f"Logging configured with level {logging.getLevelName(self.log_level)}")

    def _apply_settings(self, settings: Dict[str, Any]):
        """Apply settings from the provided dictionary.

        Args:
            settings: Dictionary containing logging settings
        """
        if settings.get('log_dir'):
            self.log_dir = os.path.expanduser(settings['log_dir'])

        if 'max_log_size' in settings:
            self.max_file_size = int(settings['max_log_size'])

        if 'backup_count' in settings:
            self.backup_count = int(settings['backup_count'])

        if 'log_level' in settings:
            self.log_level = self._parse_level(settings['log_level'])

        if 'console_logging' in settings:
            self.console_logging = bool(settings['console_logging'])

        if 'file_logging' in settings:
            self.file_logging = bool(settings['file_logging'])

    def _parse_level(self, level) -> int:
        """Parse a log level string to its integer value.

        Args:
            level: String or integer log level

        Returns:
            int: Logging level
        """
        if isinstance(level, int):
            return level

        level_map = {
            'debug': logging.DEBUG,
            'metric': METRIC,
            'info': logging.INFO,
            'warning': logging.WARNING,
            'error': logging.ERROR,
            'critical': logging.CRITICAL
        }

        return level_map.get(str(level).lower(), logging.INFO)

    def reset(self):
        """Remove the handlers installed by configure()."""
        app_logger = logging.getLogger("hubexplorer")
        for handler in self.handlers:
            app_logger.removeHandler(handler)
            handler.close()
        self.handlers = []
        self._configured = False


# Create a singleton instance
logging_manager = LoggingManager()


def configure_logging(settings: Optional[Dict[str, Any]] = None):
    """Configure the logging system with the specified settings.

    Args:
        settings: Dictionary containing logging settings. If None, default settings are used.
    """
    logging_manager.configure(settings)
