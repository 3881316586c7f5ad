"""
Service layer for the Git Playground simulator.

This module contains the session controller that owns the live repository
snapshot and the configuration manager.
"""

from .config_manager import ConfigurationManager
from .session_controller import SessionController

__all__ = [
    "ConfigurationManager",
    "SessionController",
]
