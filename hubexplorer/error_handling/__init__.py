"""Error Handling Module for HubExplorer.

This module provides error classification and the exception types raised
by HubExplorer for invalid configuration.
"""

from .error_manager import (
    ErrorManager,
    ErrorCategory,
    ErrorSeverity,
    ErrorEvent,
    DeviceExplorerError,
    ConfigurationError
)

__all__ = [
    'ErrorManager',
    'ErrorCategory',
    'ErrorSeverity',
    'ErrorEvent',
    'DeviceExplorerError',
    'ConfigurationError'
]
