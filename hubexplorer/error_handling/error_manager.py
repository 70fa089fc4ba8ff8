"""Error Manager Module for HubExplorer.

This module provides error classification and bookkeeping for registry
operations. Errors are recorded and logged here, but never retried or
suppressed: the caller of the registry client decides how to recover.
"""

from typing import Dict, List, Optional, Any
from enum import Enum
from dataclasses import dataclass
from datetime import datetime
import itertools
import logging

logger = logging.getLogger("hubexplorer.errors")


class DeviceExplorerError(Exception):
    """Base class for errors raised by HubExplorer itself."""


class ConfigurationError(DeviceExplorerError, ValueError):
    """Raised when settings or connection parameters are invalid."""


class ErrorSeverity(Enum):
    """Enum for different error severity levels."""
    LOW = 1      # Expected conditions such as a missing device
    MEDIUM = 2   # Degraded results, e.g. connection strings cannot be built
    HIGH = 3     # A registry call failed
    CRITICAL = 4 # The client cannot be used at all


class ErrorCategory(Enum):
    """Enum for different categories of errors."""
    NOT_FOUND = "not_found"
    TRANSPORT = "transport"
    MALFORMED_INPUT = "malformed_input"
    CONFIGURATION = "configuration"


@dataclass
class ErrorEvent:
    """Class representing an error event."""
    timestamp: datetime
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    details: Optional[Dict] = None
    operation: Optional[str] = None
    resolved: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'timestamp': self.timestamp.isoformat(),
            'category': self.category.value,
            'severity': self.severity.value,
            'message': self.message,
            'details': self.details,
            'operation': self.operation,
            'resolved': self.resolved
        }


class ErrorManager:
    """Class for recording errors reported by registry operations."""

    def __init__(self):
        """Initialize the error manager."""
        self.active_errors: Dict[str, ErrorEvent] = {}
        self.error_history: List[ErrorEvent] = []
        self._sequence = itertools.count(1)

    def handle_error(self, category: ErrorCategory, severity: ErrorSeverity,
                     message: str, details: Optional[Dict] = None,
                     operation: Optional[str] = None) -> str:
        """Record a new error event.

        Args:
            category: Category of the error
            severity: Severity level of the error
            message: Error description
            details: Additional error details
            operation: Name of the registry operation that failed, if any

        Returns:
            str: ID of the error event
        """
        error_id = f"{category.value}_{datetime.now().strftime('%Y%m%d_%H%M%S')}_{next(self._sequence)}"
        error_event = ErrorEvent(
            timestamp=datetime.now(),
            category=category,
            severity=severity,
            message=message,
            details=details,
            operation=operation
        )

        self.active_errors[error_id] = error_event
        self.error_history.append(error_event)

        level = logging.ERROR if severity.value >= ErrorSeverity.HIGH.value else logging.WARNING
        logger.log(level, f"[{category.value}] {message} (error_id={error_id}, operation={operation})")

        return error_id

    def resolve_error(self, error_id: str) -> bool:
        """Mark an active error as resolved.

        Args:
            error_id: ID of the error to resolve

        Returns:
            bool: True if the error was active, False otherwise
        """
        error = self.active_errors.pop(error_id, None)
        if error is None:
            return False
        error.resolved = True
        logger.info(f"Error {error_id} resolved")
        return True

    def get_active_errors(self) -> List[Dict[str, Any]]:
        """Get all currently active errors.

        Returns:
            List of active errors and their details
        """
        return [{'id': error_id, **error.to_dict()}
                for error_id, error in self.active_errors.items()]

    def get_error_history(self, category: Optional[ErrorCategory] = None,
                          severity: Optional[ErrorSeverity] = None) -> List[Dict[str, Any]]:
        """Get error history with optional filtering.

        Args:
            category: Filter by error category
            severity: Filter by error severity

        Returns:
            List of historical errors matching the filters
        """
        filtered_history = self.error_history
        if category:
            filtered_history = [e for e in filtered_history if e.category == category]
        if severity:
            filtered_history = [e for e in filtered_history if e.severity == severity]

        return [error.to_dict() for error in filtered_history]

    def clear(self) -> None:
        """Forget all active and historical errors."""
        self.active_errors.clear()
        self.error_history.clear()
