"""
Data models for the Git Playground simulator.

This module contains the immutable repository snapshot types, the parsed
command variants, command outcomes and configuration.
"""

from .config import DEFAULT_LATENCIES, SimulatorConfig
from .graph import GraphEdge, GraphNode, RepositoryGraph
from .outcome import CommandOutcome, PacingStep, split_output
from .repository import (
    Branch,
    Commit,
    FileArea,
    RemoteBranch,
    RemoteRepository,
    RepositoryState,
    StagedFile,
    StagedStatus,
    StashedFile,
    StashEntry,
    SyncStatus,
    WorkingFile,
    WorkingStatus,
)

__all__ = [
    "Branch",
    "Commit",
    "CommandOutcome",
    "DEFAULT_LATENCIES",
    "FileArea",
    "GraphEdge",
    "GraphNode",
    "PacingStep",
    "RemoteBranch",
    "RemoteRepository",
    "RepositoryGraph",
    "RepositoryState",
    "SimulatorConfig",
    "StagedFile",
    "StagedStatus",
    "StashedFile",
    "StashEntry",
    "SyncStatus",
    "WorkingFile",
    "WorkingStatus",
    "split_output",
]
