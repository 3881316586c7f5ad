"""
Protocol interfaces for the Git Playground simulator.

This module defines the seams between the simulator core and the front
ends (terminal, visualizer) that drive it or display its state.
"""

from typing import TYPE_CHECKING, Optional, Protocol

from .models.outcome import CommandOutcome
from .models.repository import RepositoryState

if TYPE_CHECKING:
    from .models.config import SimulatorConfig


class ICommandInterpreter(Protocol):
    """Protocol for components that execute one command against a snapshot."""

    def interpret(self, state: RepositoryState, command_line: str) -> CommandOutcome:
        """Return the next snapshot and transcript for ``command_line``."""
        ...

    def reset_playground(self) -> CommandOutcome:
        """Return the outcome that restores the sample repository."""
        ...


class ISessionListener(Protocol):
    """Protocol for front ends observing a session."""

    def on_progress(self, message: str) -> None:
        """Receive an intermediate, cosmetic progress line."""
        ...

    def on_publish(self, state: RepositoryState, output: str) -> None:
        """Receive a newly published snapshot and its transcript."""
        ...


class ISessionController(Protocol):
    """Protocol for the owner of the live repository snapshot."""

    @property
    def state(self) -> RepositoryState:
        ...

    @property
    def is_busy(self) -> bool:
        ...

    async def execute(self, command_line: str) -> Optional[CommandOutcome]:
        """Run a command unless another one is in flight."""
        ...

    async def reset(self) -> CommandOutcome:
        """Restore the sample repository."""
        ...


class IConfigurationManager(Protocol):
    """Protocol for loading simulator configuration."""

    def load_config(self) -> "SimulatorConfig":
        """Load configuration from file."""
        ...

    def get_config(self) -> "SimulatorConfig":
        """Return the cached configuration, loading it if needed."""
        ...
