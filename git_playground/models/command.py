"""
Parsed git command variants.

Each supported command-line shape maps to exactly one frozen dataclass;
the interpreter dispatches on the variant type rather than on raw tokens.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class InitCommand:
    pass


@dataclass(frozen=True)
class StatusCommand:
    pass


@dataclass(frozen=True)
class LogCommand:
    pass


@dataclass(frozen=True)
class AddAllCommand:
    pass


@dataclass(frozen=True)
class AddPathCommand:
    path: str


@dataclass(frozen=True)
class CommitCommand:
    message: str


@dataclass(frozen=True)
class BranchListCommand:
    pass


@dataclass(frozen=True)
class BranchCreateCommand:
    name: str


@dataclass(frozen=True)
class BranchDeleteCommand:
    name: str
    force: bool = False


@dataclass(frozen=True)
class CheckoutCommand:
    name: str
    create: bool = False


@dataclass(frozen=True)
class ResetHardCommand:
    commit_id: str


@dataclass(frozen=True)
class RevertCommand:
    commit_id: str


@dataclass(frozen=True)
class StashSaveCommand:
    message: str = "WIP"


@dataclass(frozen=True)
class StashListCommand:
    pass


@dataclass(frozen=True)
class StashPopCommand:
    pass


@dataclass(frozen=True)
class RemoteAddCommand:
    name: str
    url: str


@dataclass(frozen=True)
class RemoteShowCommand:
    name: str


@dataclass(frozen=True)
class PushCommand:
    remote: Optional[str] = None
    branch: Optional[str] = None


@dataclass(frozen=True)
class FetchCommand:
    remote: Optional[str] = None


@dataclass(frozen=True)
class PullCommand:
    remote: Optional[str] = None


@dataclass(frozen=True)
class CloneCommand:
    url: str


@dataclass(frozen=True)
class NoOpCommand:
    """An argument shape the simulator silently ignores."""

    subcommand: str


GitCommand = Union[
    InitCommand,
    StatusCommand,
    LogCommand,
    AddAllCommand,
    AddPathCommand,
    CommitCommand,
    BranchListCommand,
    BranchCreateCommand,
    BranchDeleteCommand,
    CheckoutCommand,
    ResetHardCommand,
    RevertCommand,
    StashSaveCommand,
    StashListCommand,
    StashPopCommand,
    RemoteAddCommand,
    RemoteShowCommand,
    PushCommand,
    FetchCommand,
    PullCommand,
    CloneCommand,
    NoOpCommand,
]
