"""
Command outcome data models.

This module defines the result of interpreting one command line: the next
repository snapshot, the output transcript and the pacing script the
session controller plays back before publishing them.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..utils.error_handling import ErrorCategory
from .repository import RepositoryState

DEFAULT_LINE_SEPARATOR = "\\n"


@dataclass(frozen=True)
class PacingStep:
    """Optional progress message followed by a simulated delay."""

    message: Optional[str]
    delay_ms: int

    def validate(self) -> None:
        if self.delay_ms < 0:
            raise ValueError("delay_ms cannot be negative")


@dataclass(frozen=True)
class CommandOutcome:
    """Result of interpreting a single command line."""

    state: RepositoryState
    output: str
    steps: Tuple[PacingStep, ...] = ()
    interim_state: Optional[RepositoryState] = None
    succeeded: bool = True
    error_category: Optional[ErrorCategory] = None

    @property
    def is_error(self) -> bool:
        return self.output.startswith("Error:")

    @property
    def total_delay_ms(self) -> int:
        return sum(step.delay_ms for step in self.steps)


def split_output(output: str, separator: str = DEFAULT_LINE_SEPARATOR) -> List[str]:
    """Split a transcript into its logical lines."""
    if not output:
        return []
    return output.split(separator)
