"""
Command-line parser for the simulator.

Turns a raw ``git ...`` line into one of the command variants defined in
``models.command``. Tokenization is plain whitespace splitting; there is no
shell-style quoting.
"""

from typing import Callable, Dict, List

from ..models.command import (
    AddAllCommand,
    AddPathCommand,
    BranchCreateCommand,
    BranchDeleteCommand,
    BranchListCommand,
    CheckoutCommand,
    CloneCommand,
    CommitCommand,
    FetchCommand,
    GitCommand,
    InitCommand,
    LogCommand,
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
    StatusCommand,
)
from ..utils.error_handling import UnknownCommandError, UsageError
from ..utils.logging import get_logger

logger = get_logger("command.parser")

_QUOTE_CHARS = "'\""


def strip_quotes(text: str) -> str:
    return "".join(ch for ch in text if ch not in _QUOTE_CHARS)


def _parse_add(args: List[str]) -> GitCommand:
    if not args:
        return NoOpCommand("add")
    if args[0] == ".":
        return AddAllCommand()
    return AddPathCommand(path=args[0])


def _parse_commit(args: List[str]) -> GitCommand:
    message = strip_quotes(" ".join(args[1:])) if args[:1] == ["-m"] else ""
    if not message.strip():
        raise UsageError('please provide a commit message (-m "message")')
    return CommitCommand(message=message)


def _parse_branch(args: List[str]) -> GitCommand:
    if not args:
        return BranchListCommand()
    if args[0].startswith("-"):
        if len(args) < 2:
            raise UsageError("branch name required")
        if args[0] in ("-d", "-D"):
            return BranchDeleteCommand(name=args[1], force=args[0] == "-D")
        return NoOpCommand("branch")
    return BranchCreateCommand(name=args[0])


def _parse_checkout(args: List[str]) -> GitCommand:
    create = bool(args) and args[0] == "-b"
    name_args = args[1:] if create else args
    if not name_args:
        raise UsageError("please specify a branch name")
    return CheckoutCommand(name=name_args[0], create=create)


def _parse_reset(args: List[str]) -> GitCommand:
    if len(args) >= 2 and args[0] == "--hard":
        return ResetHardCommand(commit_id=args[1])
    return NoOpCommand("reset")


def _parse_revert(args: List[str]) -> GitCommand:
    if args:
        return RevertCommand(commit_id=args[0])
    return NoOpCommand("revert")


def _parse_stash(args: List[str]) -> GitCommand:
    action = args[0] if args else None
    if action == "save":
        return StashSaveCommand(message=" ".join(args[1:]) or "WIP")
    if action == "list":
        return StashListCommand()
    if action == "pop":
        return StashPopCommand()
    return NoOpCommand("stash")


def _parse_remote(args: List[str]) -> GitCommand:
    if len(args) >= 3 and args[0] == "add":
        return RemoteAddCommand(name=args[1], url=args[2])
    if len(args) >= 2 and args[0] == "show":
        return RemoteShowCommand(name=args[1])
    return NoOpCommand("remote")


def _parse_push(args: List[str]) -> GitCommand:
    return PushCommand(
        remote=args[0] if args else None,
        branch=args[1] if len(args) > 1 else None,
    )


def _parse_clone(args: List[str]) -> GitCommand:
    if not args:
        raise UsageError("Please provide a repository URL")
    return CloneCommand(url=args[0])


_PARSERS: Dict[str, Callable[[List[str]], GitCommand]] = {
    "init": lambda args: InitCommand(),
    "status": lambda args: StatusCommand(),
    "log": lambda args: LogCommand(),
    "add": _parse_add,
    "commit": _parse_commit,
    "branch": _parse_branch,
    "checkout": _parse_checkout,
    "reset": _parse_reset,
    "revert": _parse_revert,
    "stash": _parse_stash,
    "remote": _parse_remote,
    "push": _parse_push,
    "fetch": lambda args: FetchCommand(remote=args[0] if args else None),
    "pull": lambda args: PullCommand(remote=args[0] if args else None),
    "clone": _parse_clone,
}

SUPPORTED_SUBCOMMANDS = tuple(_PARSERS)


def parse_command(command_line: str) -> GitCommand:
    """
    Parse a raw command line.

    Args:
        command_line: Text typed by the user, e.g. ``git commit -m "msg"``

    Returns:
        The matching command variant; argument shapes the simulator does not
        handle yield ``NoOpCommand``.

    Raises:
        UsageError: If the line is not a git command or arguments are missing
        UnknownCommandError: If the subcommand is not supported
    """
    tokens = command_line.split()
    if not tokens or tokens[0] != "git":
        raise UsageError("Not a git command")
    if len(tokens) < 2:
        raise UsageError("please specify a git command")

    subcommand, args = tokens[1], tokens[2:]
    parser = _PARSERS.get(subcommand)
    if parser is None:
        raise UnknownCommandError(subcommand)

    command = parser(args)
    logger.debug(
        "Parsed command",
        extra={"subcommand": subcommand, "variant": type(command).__name__},
    )
    return command
