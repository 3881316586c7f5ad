"""
Unit tests for data model validation.
"""

from dataclasses import FrozenInstanceError, replace

import pytest

from git_playground.models import (
    Branch,
    CommandOutcome,
    PacingStep,
    SimulatorConfig,
    StagedFile,
    StagedStatus,
    WorkingFile,
    WorkingStatus,
    split_output,
)


class TestRepositoryState:
    """Test RepositoryState invariants."""

    def test_initial_state_is_valid(self, initial_state):
        """Test that a fresh repository passes validation."""
        assert initial_state.validate() is True
        assert initial_state.current_branch == "main"
        assert initial_state.head == "initial"
        assert initial_state.root_commit.parent is None

    def test_snapshots_are_frozen(self, initial_state):
        """Test that snapshots cannot be mutated in place."""
        with pytest.raises(FrozenInstanceError):
            initial_state.head = "other"

    def test_unknown_head_raises_error(self, initial_state):
        """Test that HEAD must name a known commit."""
        state = replace(initial_state, head="missing")
        with pytest.raises(ValueError, match="HEAD 'missing'"):
            state.validate()

    def test_unknown_current_branch_raises_error(self, initial_state):
        """Test that the current branch must exist."""
        state = replace(initial_state, current_branch="ghost")
        with pytest.raises(ValueError, match="current branch 'ghost'"):
            state.validate()

    def test_duplicate_branch_names_raise_error(self, initial_state):
        """Test that branch names must be unique."""
        state = replace(
            initial_state,
            branches=initial_state.branches + (Branch("main", ("initial",)),),
        )
        with pytest.raises(ValueError, match="branch names must be unique"):
            state.validate()

    def test_empty_branch_raises_error(self, initial_state):
        """Test that every branch references at least one commit."""
        state = replace(
            initial_state,
            branches=initial_state.branches + (Branch("empty", ()),),
        )
        with pytest.raises(ValueError, match="branch 'empty' has no commits"):
            state.validate()

    def test_path_in_both_areas_raises_error(self, initial_state):
        """Test that a path is either staged or in the working directory."""
        state = replace(
            initial_state,
            staging_area=(StagedFile("app.js", StagedStatus.ADDED),),
            working_directory=(WorkingFile("app.js", WorkingStatus.MODIFIED),),
        )
        with pytest.raises(ValueError, match="app.js"):
            state.validate()

    def test_active_branch_lookup(self, initial_state):
        """Test lookup helpers."""
        assert initial_state.active_branch.name == "main"
        assert initial_state.active_branch.tip == "initial"
        assert initial_state.find_branch("nope") is None
        assert initial_state.find_commit("initial").message == "Initial commit"
        assert initial_state.find_remote("origin") is None


class TestSimulatorConfig:
    """Test SimulatorConfig validation."""

    def test_defaults_are_valid(self):
        """Test default configuration."""
        config = SimulatorConfig()
        assert config.validate() is True
        assert config.latency_for("push") == (1000, 500, 800, 600)
        assert config.latency_for("unknown") == ()

    def test_negative_time_scale_raises_error(self):
        """Test that time_scale cannot be negative."""
        with pytest.raises(ValueError, match="time_scale"):
            SimulatorConfig(time_scale=-1).validate()

    def test_negative_latency_raises_error(self):
        """Test that latencies must be non-negative integers."""
        config = SimulatorConfig(latencies={"push": (100, -5)})
        with pytest.raises(ValueError, match="latency 'push'"):
            config.validate()

    def test_duplicate_sample_files_raise_error(self):
        """Test that sample files must be unique."""
        with pytest.raises(ValueError, match="sample_files"):
            SimulatorConfig(sample_files=["a.txt", "a.txt"]).validate()

    def test_invalid_log_level_raises_error(self):
        """Test log level validation."""
        with pytest.raises(ValueError, match="log_level"):
            SimulatorConfig(log_level="LOUD").validate()


class TestCommandOutcome:
    """Test CommandOutcome helpers."""

    def test_total_delay(self, initial_state):
        """Test that pacing delays add up."""
        outcome = CommandOutcome(
            state=initial_state,
            output="done",
            steps=(PacingStep(None, 100), PacingStep("Working...", 250)),
        )
        assert outcome.total_delay_ms == 350
        assert outcome.is_error is False

    def test_negative_delay_raises_error(self):
        """Test pacing step validation."""
        with pytest.raises(ValueError, match="negative"):
            PacingStep("x", -1).validate()

    def test_split_output_on_literal_separator(self):
        """Test splitting a transcript on the two-character separator."""
        assert split_output("a\\nb\\n") == ["a", "b", ""]
        assert split_output("") == []
        assert split_output("a|b", separator="|") == ["a", "b"]
