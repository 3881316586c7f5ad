"""
Unit tests for the command-line parser.
"""

import pytest

from git_playground.components.command_parser import parse_command, strip_quotes
from git_playground.models.command import (
    AddAllCommand,
    AddPathCommand,
    BranchCreateCommand,
    BranchDeleteCommand,
    BranchListCommand,
    CheckoutCommand,
    CloneCommand,
    CommitCommand,
    FetchCommand,
    InitCommand,
    NoOpCommand,
    PullCommand,
    PushCommand,
    RemoteAddCommand,
    RemoteShowCommand,
    ResetHardCommand,
    RevertCommand,
    StashListCommand,
    StashPopCommand,
    StashSaveCommand,
)
from git_playground.utils.error_handling import (
    ErrorCategory,
    UnknownCommandError,
    UsageError,
)


class TestParseCommand:
    """Test cases for parse_command."""

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("git init", InitCommand()),
            ("git add .", AddAllCommand()),
            ("git add app.js", AddPathCommand("app.js")),
            ("git branch", BranchListCommand()),
            ("git branch feature", BranchCreateCommand("feature")),
            ("git branch -d feature", BranchDeleteCommand("feature")),
            ("git branch -D feature", BranchDeleteCommand("feature", force=True)),
            ("git checkout main", CheckoutCommand("main")),
            ("git checkout -b feature", CheckoutCommand("feature", create=True)),
            ("git reset --hard abc1234", ResetHardCommand("abc1234")),
            ("git revert abc1234", RevertCommand("abc1234")),
            ("git stash save", StashSaveCommand("WIP")),
            ("git stash save half done", StashSaveCommand("half done")),
            ('git stash save "WIP feature"', StashSaveCommand('"WIP feature"')),
            ("git stash list", StashListCommand()),
            ("git stash pop", StashPopCommand()),
            ("git remote add origin http://x", RemoteAddCommand("origin", "http://x")),
            ("git remote show origin", RemoteShowCommand("origin")),
            ("git push", PushCommand()),
            ("git push origin", PushCommand("origin")),
            ("git push origin feature", PushCommand("origin", "feature")),
            ("git fetch", FetchCommand()),
            ("git pull upstream", PullCommand("upstream")),
            ("git clone https://host/demo.git", CloneCommand("https://host/demo.git")),
        ],
    )
    def test_supported_shapes(self, line, expected):
        """Test that each enumerated shape maps to its variant."""
        assert parse_command(line) == expected

    def test_whitespace_is_collapsed(self):
        """Test that repeated whitespace does not create empty tokens."""
        assert parse_command("  git   checkout    main  ") == CheckoutCommand("main")

    def test_commit_message_rejoined_and_unquoted(self):
        """Test commit message reconstruction."""
        command = parse_command('git commit -m "Add  feature" it\'s')
        assert command == CommitCommand("Add feature its")

    @pytest.mark.parametrize(
        "line",
        ["git commit", "git commit -m", 'git commit -m ""', "git commit msg"],
    )
    def test_commit_without_message_is_usage_error(self, line):
        """Test that commit requires -m and a message."""
        with pytest.raises(UsageError, match="please provide a commit message"):
            parse_command(line)

    @pytest.mark.parametrize(
        "line",
        [
            "git add",
            "git reset",
            "git reset --soft abc",
            "git reset --hard",
            "git revert",
            "git stash",
            "git stash drop",
            "git remote",
            "git remote add origin",
            "git remote show",
            "git branch -m newname",
        ],
    )
    def test_unhandled_shapes_are_no_ops(self, line):
        """Test that non-enumerated argument shapes are silent no-ops."""
        assert isinstance(parse_command(line), NoOpCommand)

    def test_not_a_git_command(self):
        """Test rejection of lines not starting with git."""
        with pytest.raises(UsageError, match="Not a git command"):
            parse_command("ls -la")

    def test_empty_line(self):
        """Test rejection of empty input."""
        with pytest.raises(UsageError):
            parse_command("   ")

    def test_unknown_subcommand(self):
        """Test unknown subcommand error."""
        with pytest.raises(UnknownCommandError) as exc_info:
            parse_command("git rebase main")
        assert exc_info.value.message == "unknown git command 'rebase'"
        assert exc_info.value.category == ErrorCategory.UNKNOWN_COMMAND

    @pytest.mark.parametrize(
        "line,message",
        [
            ("git branch -d", "branch name required"),
            ("git checkout", "please specify a branch name"),
            ("git checkout -b", "please specify a branch name"),
            ("git clone", "Please provide a repository URL"),
        ],
    )
    def test_missing_names_are_usage_errors(self, line, message):
        """Test missing required arguments."""
        with pytest.raises(UsageError, match=message):
            parse_command(line)


def test_strip_quotes():
    """Test quote stripping."""
    assert strip_quotes("\"it's\"") == "its"
