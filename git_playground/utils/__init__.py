"""
Shared utilities for the Git Playground simulator.
"""

from .error_handling import (
    ErrorCategory,
    ErrorSeverity,
    ErrorTracker,
    GitSimulatorError,
    NotFoundError,
    PreconditionError,
    UnknownCommandError,
    UsageError,
    get_error_tracker,
)
from .logging import get_logger, setup_logging

__all__ = [
    "ErrorCategory",
    "ErrorSeverity",
    "ErrorTracker",
    "GitSimulatorError",
    "NotFoundError",
    "PreconditionError",
    "UnknownCommandError",
    "UsageError",
    "get_error_tracker",
    "get_logger",
    "setup_logging",
]
