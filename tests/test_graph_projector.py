"""
Unit tests for the commit graph projection.
"""

from dataclasses import replace

from git_playground.components.graph_projector import owning_branch, project_graph
from git_playground.models import Commit
from git_playground.models.graph import DETACHED, GraphEdge


class TestProjectGraph:
    """Test cases for project_graph."""

    def test_initial_repository(self, initial_state):
        """Test a single root node with no edges."""
        graph = project_graph(initial_state)

        assert [n.id for n in graph.nodes] == ["initial"]
        assert graph.nodes[0].branch == "main"
        assert graph.nodes[0].is_head is True
        assert graph.edges == ()
        assert graph.current_branch == "main"

    def test_edges_point_from_child_to_parent(self, run, sample_state):
        """Test edge direction and branch coloring."""
        state = run(
            sample_state,
            "git checkout -b feature",
            "git add index.html",
            "git commit -m work",
        ).state
        graph = project_graph(state)

        assert graph.edges == (
            GraphEdge(source="c000001", target="initial", branch="feature"),
        )
        assert graph.staged_paths == ()
        assert graph.working_paths == ("styles.css", "app.js")

    def test_orphan_commits_are_detached(self, initial_state):
        """Test commits referenced by no branch."""
        orphan = Commit("zzz", "lost", 0, "missing-parent")
        state = replace(initial_state, commits=(orphan,) + initial_state.commits)
        graph = project_graph(state)

        assert owning_branch(state, "zzz") == DETACHED
        assert graph.nodes[0].branch == DETACHED
        assert graph.edges == ()

    def test_projection_does_not_touch_state(self, sample_state):
        """Test that projecting is read-only."""
        before = sample_state
        project_graph(sample_state)
        assert sample_state == before
