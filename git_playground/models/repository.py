"""
Repository state data models.

This module defines the immutable snapshot types describing the whole
simulated repository at an instant: commits, branches, staging area,
working directory, stash and remotes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class StagedStatus(Enum):
    """Status of a file in the staging area."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"


class WorkingStatus(Enum):
    """Status of a file in the working directory."""

    MODIFIED = "modified"
    UNTRACKED = "untracked"
    DELETED = "deleted"


class FileArea(Enum):
    """Area a stashed file was captured from."""

    WORKING = "working"
    STAGED = "staged"


class SyncStatus(Enum):
    """Relationship between the current branch and its upstream."""

    AHEAD = "ahead"
    BEHIND = "behind"
    DIVERGED = "diverged"
    UP_TO_DATE = "up-to-date"


@dataclass(frozen=True)
class Commit:
    """A commit; never deleted once created."""

    id: str
    message: str
    timestamp: int  # ms since epoch
    parent: Optional[str]
    author: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class Branch:
    """A branch referencing commit ids, newest first."""

    name: str
    commits: Tuple[str, ...]
    upstream: Optional[str] = None  # "remote/branch"
    ahead: Optional[int] = None
    behind: Optional[int] = None

    @property
    def tip(self) -> str:
        return self.commits[0]


@dataclass(frozen=True)
class StagedFile:
    path: str
    status: StagedStatus


@dataclass(frozen=True)
class WorkingFile:
    path: str
    status: WorkingStatus


@dataclass(frozen=True)
class StashedFile:
    """A file captured by ``stash save``, tagged with the area it came from."""

    path: str
    status: WorkingStatus
    source: FileArea


@dataclass(frozen=True)
class StashEntry:
    id: str
    message: str
    timestamp: int
    files: Tuple[StashedFile, ...]


@dataclass(frozen=True)
class RemoteBranch:
    name: str
    commits: Tuple[str, ...]
    last_commit: str


@dataclass(frozen=True)
class RemoteRepository:
    """A configured remote; its URL is never dereferenced."""

    name: str
    url: str
    branches: Tuple[RemoteBranch, ...] = ()
    commits: Tuple[Commit, ...] = ()

    def find_branch(self, name: str) -> Optional[RemoteBranch]:
        return next((b for b in self.branches if b.name == name), None)

    def find_commit(self, commit_id: str) -> Optional[Commit]:
        return next((c for c in self.commits if c.id == commit_id), None)


@dataclass(frozen=True)
class RepositoryState:
    """
    Snapshot of the whole simulated repository.

    Instances are never mutated; every command that changes the repository
    produces a new snapshot via ``dataclasses.replace``.
    """

    current_branch: str
    branches: Tuple[Branch, ...]
    commits: Tuple[Commit, ...]  # newest first
    head: str
    staging_area: Tuple[StagedFile, ...] = ()
    working_directory: Tuple[WorkingFile, ...] = ()
    stash: Tuple[StashEntry, ...] = ()  # newest first
    remotes: Tuple[RemoteRepository, ...] = ()
    current_remote: Optional[str] = None
    is_pushing_to_remote: bool = False
    is_fetching_from_remote: bool = False
    remote_sync_status: Optional[SyncStatus] = None

    def find_branch(self, name: str) -> Optional[Branch]:
        return next((b for b in self.branches if b.name == name), None)

    def find_commit(self, commit_id: str) -> Optional[Commit]:
        return next((c for c in self.commits if c.id == commit_id), None)

    def find_remote(self, name: str) -> Optional[RemoteRepository]:
        return next((r for r in self.remotes if r.name == name), None)

    def find_working_file(self, path: str) -> Optional[WorkingFile]:
        return next((f for f in self.working_directory if f.path == path), None)

    @property
    def active_branch(self) -> Branch:
        """The branch record named by ``current_branch``."""
        branch = self.find_branch(self.current_branch)
        if branch is None:
            raise ValueError(f"current branch '{self.current_branch}' is missing")
        return branch

    @property
    def root_commit(self) -> Commit:
        """The oldest commit in the log."""
        return self.commits[-1]

    def validate(self) -> bool:
        """
        Validate the repository invariants.

        Raises:
            ValueError: If any invariant is violated.
        """
        commit_ids = [c.id for c in self.commits]
        if not commit_ids:
            raise ValueError("repository must contain at least one commit")
        if len(set(commit_ids)) != len(commit_ids):
            raise ValueError("commit ids must be unique")

        if self.head not in commit_ids:
            raise ValueError(f"HEAD '{self.head}' does not name a known commit")

        branch_names = [b.name for b in self.branches]
        if len(set(branch_names)) != len(branch_names):
            raise ValueError("branch names must be unique")
        if self.current_branch not in branch_names:
            raise ValueError(
                f"current branch '{self.current_branch}' is not a known branch"
            )
        for branch in self.branches:
            if not branch.commits:
                raise ValueError(f"branch '{branch.name}' has no commits")

        remote_names = [r.name for r in self.remotes]
        if len(set(remote_names)) != len(remote_names):
            raise ValueError("remote names must be unique")

        staged_paths = [f.path for f in self.staging_area]
        working_paths = [f.path for f in self.working_directory]
        if len(set(staged_paths)) != len(staged_paths):
            raise ValueError("staged paths must be unique")
        if len(set(working_paths)) != len(working_paths):
            raise ValueError("working directory paths must be unique")
        overlap = set(staged_paths) & set(working_paths)
        if overlap:
            raise ValueError(
                f"paths present in both staging area and working directory: "
                f"{sorted(overlap)}"
            )

        return True
