"""
Graph projection data models consumed by visualization front ends.
"""

from dataclasses import dataclass
from typing import Tuple

DETACHED = "detached"


@dataclass(frozen=True)
class GraphNode:
    """One commit, colored by the branch that owns it."""

    id: str
    message: str
    branch: str
    is_head: bool = False


@dataclass(frozen=True)
class GraphEdge:
    """Edge from a child commit to its parent."""

    source: str
    target: str
    branch: str


@dataclass(frozen=True)
class RepositoryGraph:
    nodes: Tuple[GraphNode, ...]
    edges: Tuple[GraphEdge, ...]
    current_branch: str
    staged_paths: Tuple[str, ...] = ()
    working_paths: Tuple[str, ...] = ()
