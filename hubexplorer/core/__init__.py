"""Core services for HubExplorer: logging and settings."""

from .logging_config import LoggingManager, MetricLogger, configure_logging, get_logger, METRIC
from .settings import Settings, SettingsManager

__all__ = [
    'LoggingManager', 'MetricLogger', 'configure_logging', 'get_logger', 'METRIC',
    'Settings', 'SettingsManager'
]
