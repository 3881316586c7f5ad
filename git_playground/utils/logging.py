"""
Structured logging utilities for the Git Playground simulator.

This module provides logging configuration with structured JSON payloads,
component-scoped loggers and optional rotating log files.
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

ROOT_LOGGER_NAME = "git_playground"


class LogLevel(Enum):
    """Log levels accepted by the logging manager."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ComponentLogger:
    """
    Structured logger for simulator components.

    Every message is emitted as a JSON object carrying the component name
    and any extra context supplied at construction or call time.
    """

    def __init__(
        self, component_name: str, extra_context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize component logger.

        Args:
            component_name: Name of the component (e.g. 'command.interpreter')
            extra_context: Additional context to include in all log messages
        """
        self.component_name = component_name
        self.extra_context = extra_context or {}
        self.logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{component_name}")

    def _format_message(
        self, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Format log message with structured data."""
        log_data = {
            "timestamp": datetime.now().isoformat(),
            "component": self.component_name,
            "message": message,
            **self.extra_context,
        }

        if extra:
            log_data.update(extra)

        return log_data

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log debug message."""
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(json.dumps(self._format_message(message, extra), default=str))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log info message."""
        self.logger.info(json.dumps(self._format_message(message, extra), default=str))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log warning message."""
        self.logger.warning(
            json.dumps(self._format_message(message, extra), default=str)
        )

    def error(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False,
    ):
        """Log error message."""
        log_data = self._format_message(message, extra)
        if exc_info:
            log_data["exception"] = True
        self.logger.error(json.dumps(log_data, default=str), exc_info=exc_info)


class LoggingManager:
    """
    Centralized logging configuration.

    Console output always goes to stderr so it never interleaves with the
    terminal transcript. File handlers are only installed when a log
    directory is configured.
    """

    def __init__(self, log_dir: Optional[str] = None, log_level: str = "WARNING"):
        """
        Initialize logging manager.

        Args:
            log_dir: Directory for log files, or None for console only
            log_level: Default log level
        """
        self.log_dir = Path(log_dir) if log_dir else None
        self.log_level = getattr(logging, log_level.upper())
        self.component_loggers: Dict[str, ComponentLogger] = {}

        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self._setup_logging()

    def _setup_logging(self):
        """Install handlers on the package root logger."""
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(self.log_level)
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(self.log_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        if self.log_dir is None:
            return

        file_handler = logging.handlers.RotatingFileHandler(
            self.log_dir / "git_playground.log",
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=3,
        )
        file_handler.setLevel(self.log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

        error_handler = logging.handlers.RotatingFileHandler(
            self.log_dir / "errors.log",
            maxBytes=1024 * 1024,  # 1MB
            backupCount=2,
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        root_logger.addHandler(error_handler)

    def get_component_logger(
        self, component_name: str, extra_context: Optional[Dict[str, Any]] = None
    ) -> ComponentLogger:
        """
        Get or create a component logger.

        Args:
            component_name: Name of the component
            extra_context: Additional context for all log messages

        Returns:
            ComponentLogger instance
        """
        cache_key = f"{component_name}_{hash(str(extra_context))}"

        if cache_key not in self.component_loggers:
            self.component_loggers[cache_key] = ComponentLogger(
                component_name, extra_context
            )

        return self.component_loggers[cache_key]

    def set_log_level(self, level: str):
        """Set log level for the root logger and all non-error handlers."""
        log_level = getattr(logging, level.upper())
        self.log_level = log_level

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(log_level)

        for handler in root_logger.handlers:
            if "errors.log" in str(getattr(handler, "baseFilename", "")):
                continue
            handler.setLevel(log_level)

    def get_log_stats(self) -> Dict[str, Any]:
        """Get logging statistics."""
        stats: Dict[str, Any] = {
            "log_directory": str(self.log_dir) if self.log_dir else None,
            "log_level": logging.getLevelName(self.log_level),
            "component_loggers": len(self.component_loggers),
            "log_files": [],
        }

        if self.log_dir is not None:
            for log_file in self.log_dir.glob("*.log"):
                file_stats = log_file.stat()
                stats["log_files"].append(
                    {
                        "name": log_file.name,
                        "size_bytes": file_stats.st_size,
                        "modified": datetime.fromtimestamp(
                            file_stats.st_mtime
                        ).isoformat(),
                    }
                )

        return stats


# Global logging manager instance
_logging_manager: Optional[LoggingManager] = None


def setup_logging(
    log_dir: Optional[str] = None, log_level: str = "WARNING"
) -> LoggingManager:
    """
    Setup global logging configuration.

    Args:
        log_dir: Directory for log files, or None for console only
        log_level: Default log level

    Returns:
        LoggingManager instance
    """
    global _logging_manager
    _logging_manager = LoggingManager(log_dir, log_level)
    return _logging_manager


def get_logger(
    component_name: str, extra_context: Optional[Dict[str, Any]] = None
) -> ComponentLogger:
    """
    Get a component logger, initializing console logging on first use.

    Args:
        component_name: Name of the component
        extra_context: Additional context for all log messages

    Returns:
        ComponentLogger instance
    """
    if _logging_manager is None:
        setup_logging()

    return _logging_manager.get_component_logger(component_name, extra_context)


def get_logging_stats() -> Dict[str, Any]:
    """Get logging statistics."""
    if _logging_manager is None:
        return {"error": "Logging not initialized"}

    return _logging_manager.get_log_stats()
