"""
Error handling utilities for the Git Playground simulator.

This module defines the simulator's error taxonomy and an in-memory error
tracker used by the session controller to keep statistics about failed
commands.
"""

import traceback
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional

from .logging import get_logger


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ErrorCategory(Enum):
    """Error categories for classification."""

    USAGE = "usage"
    NOT_FOUND = "not_found"
    PRECONDITION = "precondition"
    UNKNOWN_COMMAND = "unknown_command"
    INTERNAL = "internal"


class GitSimulatorError(Exception):
    """Base class for errors reported to the user as ``Error: ...`` lines."""

    category = ErrorCategory.INTERNAL

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UsageError(GitSimulatorError):
    """Malformed or incomplete command arguments."""

    category = ErrorCategory.USAGE


class NotFoundError(GitSimulatorError):
    """A referenced commit, branch, remote or path does not exist."""

    category = ErrorCategory.NOT_FOUND


class PreconditionError(GitSimulatorError):
    """The operation is not valid in the current repository state."""

    category = ErrorCategory.PRECONDITION


class UnknownCommandError(GitSimulatorError):
    """Unrecognized git subcommand."""

    category = ErrorCategory.UNKNOWN_COMMAND

    def __init__(self, name: str):
        super().__init__(f"unknown git command '{name}'")
        self.name = name


_SEVERITY_BY_CATEGORY = {
    ErrorCategory.USAGE: ErrorSeverity.LOW,
    ErrorCategory.NOT_FOUND: ErrorSeverity.LOW,
    ErrorCategory.PRECONDITION: ErrorSeverity.LOW,
    ErrorCategory.UNKNOWN_COMMAND: ErrorSeverity.LOW,
    ErrorCategory.INTERNAL: ErrorSeverity.HIGH,
}


def severity_for(category: ErrorCategory) -> ErrorSeverity:
    """Default severity for an error category."""
    return _SEVERITY_BY_CATEGORY[category]


@dataclass
class ErrorInfo:
    """Information about an error occurrence."""

    timestamp: datetime
    component: str
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    exception_type: str
    traceback: str
    context: Dict[str, Any]


class ErrorTracker:
    """
    Tracks errors and provides statistics for monitoring.
    """

    def __init__(self, max_errors: int = 500):
        """
        Initialize error tracker.

        Args:
            max_errors: Maximum number of errors to keep in memory
        """
        self.max_errors = max_errors
        self.errors: List[ErrorInfo] = []
        self.error_counts: Dict[str, int] = {}
        self.logger = get_logger("error_tracker")

    def record_error(
        self,
        component: str,
        category: ErrorCategory,
        message: str,
        severity: Optional[ErrorSeverity] = None,
        exception: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> ErrorInfo:
        """
        Record an error occurrence.

        Args:
            component: Component where error occurred
            category: Error category
            message: Error message
            severity: Error severity, derived from the category when omitted
            exception: Exception object if available
            context: Additional context information

        Returns:
            ErrorInfo object
        """
        severity = severity or severity_for(category)
        error_info = ErrorInfo(
            timestamp=datetime.now(),
            component=component,
            category=category,
            severity=severity,
            message=message,
            exception_type=type(exception).__name__ if exception else "Unknown",
            traceback=(
                "".join(
                    traceback.format_exception(
                        type(exception), exception, exception.__traceback__
                    )
                )
                if exception
                else ""
            ),
            context=context or {},
        )

        self.errors.append(error_info)
        if len(self.errors) > self.max_errors:
            self.errors.pop(0)

        error_key = f"{component}.{category.value}"
        self.error_counts[error_key] = self.error_counts.get(error_key, 0) + 1

        log_extra = {
            "category": category.value,
            "severity": severity.value,
            "exception_type": error_info.exception_type,
            "context": context,
        }
        if severity == ErrorSeverity.HIGH:
            self.logger.error(f"Error recorded: {message}", extra=log_extra)
        else:
            self.logger.debug(f"Error recorded: {message}", extra=log_extra)

        return error_info

    def get_error_stats(self) -> Dict[str, Any]:
        """Get error statistics."""
        last_hour = datetime.now() - timedelta(hours=1)

        return {
            "total_errors": len(self.errors),
            "errors_last_hour": len(
                [e for e in self.errors if e.timestamp >= last_hour]
            ),
            "error_counts": self.error_counts.copy(),
            "severity_breakdown": {
                severity.value: len([e for e in self.errors if e.severity == severity])
                for severity in ErrorSeverity
            },
            "category_breakdown": {
                category.value: len([e for e in self.errors if e.category == category])
                for category in ErrorCategory
            },
        }

    def get_recent_errors(self, limit: int = 10) -> List[ErrorInfo]:
        """Get the most recent errors."""
        return self.errors[-limit:]

    def clear(self):
        """Forget all recorded errors."""
        self.errors.clear()
        self.error_counts.clear()


# Global error tracker instance
_error_tracker: Optional[ErrorTracker] = None


def get_error_tracker() -> ErrorTracker:
    """Get global error tracker instance."""
    global _error_tracker
    if _error_tracker is None:
        _error_tracker = ErrorTracker()
    return _error_tracker
