"""
Read-only projection of a repository snapshot into a commit graph.
"""

from ..models.graph import DETACHED, GraphEdge, GraphNode, RepositoryGraph
from ..models.repository import RepositoryState


def owning_branch(state: RepositoryState, commit_id: str) -> str:
    """Name of the first branch listing ``commit_id``, or ``detached``."""
    for branch in state.branches:
        if commit_id in branch.commits:
            return branch.name
    return DETACHED


def project_graph(state: RepositoryState) -> RepositoryGraph:
    """
    Build graph nodes and child-to-parent edges for a snapshot.

    Args:
        state: Repository snapshot to project

    Returns:
        RepositoryGraph with one node per commit
    """
    known = {c.id for c in state.commits}
    nodes = []
    edges = []

    for commit in state.commits:
        branch = owning_branch(state, commit.id)
        nodes.append(
            GraphNode(
                id=commit.id,
                message=commit.message,
                branch=branch,
                is_head=commit.id == state.head,
            )
        )
        if commit.parent is not None and commit.parent in known:
            edges.append(GraphEdge(source=commit.id, target=commit.parent, branch=branch))

    return RepositoryGraph(
        nodes=tuple(nodes),
        edges=tuple(edges),
        current_branch=state.current_branch,
        staged_paths=tuple(f.path for f in state.staging_area),
        working_paths=tuple(f.path for f in state.working_directory),
    )
