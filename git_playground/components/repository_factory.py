"""
Factories for fresh repository snapshots.

The session starts from a single root commit on ``main``; ``init`` and the
playground reset add a fixed set of untracked sample files, and ``clone``
builds a repository already tracking ``origin/main``.
"""

import random
import string
import time
from dataclasses import replace
from typing import Optional

from ..models.config import SimulatorConfig
from ..models.repository import (
    Branch,
    Commit,
    RemoteBranch,
    RemoteRepository,
    RepositoryState,
    WorkingFile,
    WorkingStatus,
)

ROOT_COMMIT_ID = "initial"
ROOT_COMMIT_MESSAGE = "Initial commit"
DEFAULT_BRANCH = "main"

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_commit_id() -> str:
    """Random 7-character base-36 token; not a content hash."""
    return "".join(random.choices(_ID_ALPHABET, k=7))


def current_millis() -> int:
    return int(time.time() * 1000)


def repository_name_from_url(url: str) -> str:
    """Derive a directory name from a clone URL (``.../demo.git`` -> ``demo``)."""
    name = url.rstrip("/").split("/")[-1].replace(".git", "")
    return name or "repo"


def create_initial_state(
    config: Optional[SimulatorConfig] = None, timestamp: Optional[int] = None
) -> RepositoryState:
    """Repository with one root commit on ``main`` and nothing else."""
    config = config or SimulatorConfig()
    root = Commit(
        id=ROOT_COMMIT_ID,
        message=ROOT_COMMIT_MESSAGE,
        timestamp=timestamp if timestamp is not None else current_millis(),
        parent=None,
        author=config.author,
        email=config.email,
    )
    return RepositoryState(
        current_branch=DEFAULT_BRANCH,
        branches=(Branch(name=DEFAULT_BRANCH, commits=(ROOT_COMMIT_ID,)),),
        commits=(root,),
        head=ROOT_COMMIT_ID,
    )


def create_sample_state(
    config: Optional[SimulatorConfig] = None, timestamp: Optional[int] = None
) -> RepositoryState:
    """Initial repository plus the configured sample files, all untracked."""
    config = config or SimulatorConfig()
    state = create_initial_state(config, timestamp)
    return replace(
        state,
        working_directory=tuple(
            WorkingFile(path=path, status=WorkingStatus.UNTRACKED)
            for path in config.sample_files
        ),
    )


def create_cloned_state(
    url: str,
    config: Optional[SimulatorConfig] = None,
    timestamp: Optional[int] = None,
) -> RepositoryState:
    """Fresh repository whose ``main`` tracks ``origin/main`` at ``url``."""
    config = config or SimulatorConfig()
    state = create_initial_state(config, timestamp)
    remote_root = replace(
        state.root_commit, author=config.remote_author, email=config.remote_email
    )
    origin = RemoteRepository(
        name=config.default_remote,
        url=url,
        branches=(
            RemoteBranch(
                name=DEFAULT_BRANCH,
                commits=(ROOT_COMMIT_ID,),
                last_commit=ROOT_COMMIT_ID,
            ),
        ),
        commits=(remote_root,),
    )
    return replace(
        state,
        branches=(
            Branch(
                name=DEFAULT_BRANCH,
                commits=(ROOT_COMMIT_ID,),
                upstream=f"{config.default_remote}/{DEFAULT_BRANCH}",
                ahead=0,
                behind=0,
            ),
        ),
        remotes=(origin,),
        current_remote=config.default_remote,
    )
