"""
Tests for the error taxonomy and error tracker.
"""

from datetime import datetime, timedelta

import pytest

from git_playground.utils.error_handling import (
    ErrorCategory,
    ErrorSeverity,
    ErrorTracker,
    GitSimulatorError,
    NotFoundError,
    PreconditionError,
    UnknownCommandError,
    UsageError,
    severity_for,
)


class TestErrorTaxonomy:
    """Test the simulator error classes."""

    @pytest.mark.parametrize(
        "error_class,category",
        [
            (UsageError, ErrorCategory.USAGE),
            (NotFoundError, ErrorCategory.NOT_FOUND),
            (PreconditionError, ErrorCategory.PRECONDITION),
        ],
    )
    def test_categories(self, error_class, category):
        """Test that each error class carries its category."""
        error = error_class("something went wrong")

        assert isinstance(error, GitSimulatorError)
        assert error.category == category
        assert error.message == "something went wrong"
        assert str(error) == "something went wrong"

    def test_unknown_command_message(self):
        """Test the unknown command wording."""
        error = UnknownCommandError("frobnicate")

        assert error.name == "frobnicate"
        assert error.message == "unknown git command 'frobnicate'"
        assert error.category == ErrorCategory.UNKNOWN_COMMAND

    def test_severity_for(self):
        """Test default severities."""
        assert severity_for(ErrorCategory.USAGE) == ErrorSeverity.LOW
        assert severity_for(ErrorCategory.INTERNAL) == ErrorSeverity.HIGH


class TestErrorTracker:
    """Test ErrorTracker functionality."""

    def test_record_error(self):
        """Test recording a user error."""
        tracker = ErrorTracker()
        info = tracker.record_error(
            "session",
            ErrorCategory.NOT_FOUND,
            "branch 'ghost' does not exist",
            context={"command": "git checkout ghost"},
        )

        assert info.severity == ErrorSeverity.LOW
        assert info.exception_type == "Unknown"
        assert info.traceback == ""
        assert info.context == {"command": "git checkout ghost"}
        assert tracker.error_counts == {"session.not_found": 1}

    def test_record_exception(self):
        """Test recording an unexpected exception."""
        tracker = ErrorTracker()
        try:
            raise RuntimeError("boom")
        except RuntimeError as e:
            info = tracker.record_error(
                "session", ErrorCategory.INTERNAL, str(e), exception=e
            )

        assert info.severity == ErrorSeverity.HIGH
        assert info.exception_type == "RuntimeError"
        assert "RuntimeError: boom" in info.traceback

    def test_max_errors(self):
        """Test that old errors are discarded."""
        tracker = ErrorTracker(max_errors=3)
        for i in range(5):
            tracker.record_error("session", ErrorCategory.USAGE, f"error {i}")

        assert [e.message for e in tracker.errors] == ["error 2", "error 3", "error 4"]
        assert tracker.error_counts["session.usage"] == 5

    def test_error_stats(self):
        """Test statistics breakdowns."""
        tracker = ErrorTracker()
        tracker.record_error("session", ErrorCategory.USAGE, "a")
        tracker.record_error("session", ErrorCategory.USAGE, "b")
        old = tracker.record_error("session", ErrorCategory.INTERNAL, "c")
        old.timestamp = datetime.now() - timedelta(hours=2)

        stats = tracker.get_error_stats()

        assert stats["total_errors"] == 3
        assert stats["errors_last_hour"] == 2
        assert stats["category_breakdown"]["usage"] == 2
        assert stats["category_breakdown"]["internal"] == 1
        assert stats["severity_breakdown"] == {"low": 2, "medium": 0, "high": 1}

    def test_recent_and_clear(self):
        """Test recent errors and clearing."""
        tracker = ErrorTracker()
        for i in range(4):
            tracker.record_error("session", ErrorCategory.USAGE, f"error {i}")

        assert [e.message for e in tracker.get_recent_errors(2)] == [
            "error 2",
            "error 3",
        ]

        tracker.clear()
        assert tracker.errors == []
        assert tracker.get_error_stats()["total_errors"] == 0
