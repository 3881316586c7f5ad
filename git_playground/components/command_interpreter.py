"""
Command interpreter for the Git Playground simulator.

This module provides the CommandInterpreter class, which validates and
executes one git command against an immutable repository snapshot and
returns the next snapshot together with the output transcript and the
simulated-latency script to play back before publishing it.
"""

from dataclasses import replace
from datetime import datetime
from itertools import zip_longest
from typing import Callable, Dict, Iterable, List, Optional, Tuple

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
from ..models.config import SimulatorConfig
from ..models.outcome import CommandOutcome, PacingStep
from ..models.repository import (
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
from ..utils.error_handling import (
    GitSimulatorError,
    NotFoundError,
    PreconditionError,
)
from ..utils.logging import get_logger
from .command_parser import parse_command
from .repository_factory import (
    create_cloned_state,
    create_sample_state,
    current_millis,
    generate_commit_id,
    repository_name_from_url,
)

logger = get_logger("command.interpreter")

RESET_MESSAGE = "Playground has been reset to initial state with sample files"


def _staged_status_for(status: WorkingStatus) -> StagedStatus:
    return StagedStatus.ADDED if status == WorkingStatus.UNTRACKED else StagedStatus.MODIFIED


def _stashed_status_for(status: StagedStatus) -> WorkingStatus:
    if status == StagedStatus.ADDED:
        return WorkingStatus.UNTRACKED
    return WorkingStatus(status.value)


def _merge_staged(
    existing: Tuple[StagedFile, ...], added: Iterable[StagedFile]
) -> Tuple[StagedFile, ...]:
    added = tuple(added)
    replaced = {f.path for f in added}
    return tuple(f for f in existing if f.path not in replaced) + added


def _sync_status_for(branch: Branch) -> SyncStatus:
    ahead, behind = branch.ahead or 0, branch.behind or 0
    if ahead and behind:
        return SyncStatus.DIVERGED
    if behind:
        return SyncStatus.BEHIND
    if ahead:
        return SyncStatus.AHEAD
    return SyncStatus.UP_TO_DATE


class CommandInterpreter:
    """
    Interprets git command lines against repository snapshots.

    The interpreter never mutates the snapshot it is given and never raises
    simulator errors past ``interpret``: validation failures come back as an
    outcome holding the very same snapshot and an ``Error: ...`` transcript.
    """

    def __init__(
        self,
        config: Optional[SimulatorConfig] = None,
        id_generator: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        """
        Initialize the interpreter.

        Args:
            config: Simulator configuration; defaults are used when omitted
            id_generator: Source of new commit and stash ids
            clock: Source of timestamps in milliseconds since epoch
        """
        self.config = config or SimulatorConfig()
        self._id_generator = id_generator or generate_commit_id
        self._clock = clock or current_millis

        self._handlers: Dict[type, Callable[[RepositoryState, GitCommand], CommandOutcome]] = {
            InitCommand: self._init,
            StatusCommand: self._status,
            LogCommand: self._log,
            AddAllCommand: self._add_all,
            AddPathCommand: self._add_path,
            CommitCommand: self._commit,
            BranchListCommand: self._branch_list,
            BranchCreateCommand: self._branch_create,
            BranchDeleteCommand: self._branch_delete,
            CheckoutCommand: self._checkout,
            ResetHardCommand: self._reset_hard,
            RevertCommand: self._revert,
            StashSaveCommand: self._stash_save,
            StashListCommand: self._stash_list,
            StashPopCommand: self._stash_pop,
            RemoteAddCommand: self._remote_add,
            RemoteShowCommand: self._remote_show,
            PushCommand: self._push,
            FetchCommand: self._fetch,
            PullCommand: self._pull,
            CloneCommand: self._clone,
            NoOpCommand: self._no_op,
        }

    def interpret(self, state: RepositoryState, command_line: str) -> CommandOutcome:
        """
        Parse and execute one command line.

        Args:
            state: Current repository snapshot (left untouched)
            command_line: Raw text such as ``git checkout -b feature``

        Returns:
            CommandOutcome with the next snapshot and transcript
        """
        try:
            command = parse_command(command_line)
            return self.apply(state, command)
        except GitSimulatorError as e:
            logger.debug(
                "Command rejected",
                extra={"command": command_line, "category": e.category.value},
            )
            return CommandOutcome(
                state=state,
                output=f"Error: {e.message}",
                succeeded=False,
                error_category=e.category,
            )

    def apply(self, state: RepositoryState, command: GitCommand) -> CommandOutcome:
        """Execute an already parsed command."""
        handler = self._handlers[type(command)]
        outcome = handler(state, command)

        if outcome.state is not state:
            logger.info(
                "Repository updated",
                extra={
                    "command": type(command).__name__,
                    "branch": outcome.state.current_branch,
                    "head": outcome.state.head,
                    "commits": len(outcome.state.commits),
                },
            )
        return outcome

    def reset_playground(self) -> CommandOutcome:
        """Outcome replacing any state with the sample repository."""
        return CommandOutcome(
            state=create_sample_state(self.config, self._clock()),
            output=RESET_MESSAGE,
            steps=self._pace("playground.reset", "Resetting playground..."),
        )

    # Helpers

    def _pace(self, key: str, *messages: Optional[str]) -> Tuple[PacingStep, ...]:
        """Pair progress messages with the configured delays for ``key``."""
        steps = []
        for message, delay in zip_longest(messages, self.config.latency_for(key)):
            if message is None and not delay:
                continue
            steps.append(PacingStep(message=message, delay_ms=delay or 0))
        return tuple(steps)

    def _join(self, lines: List[str]) -> str:
        return self.config.line_separator.join(lines)

    def _new_id(self, state: RepositoryState) -> str:
        new_id = self._id_generator()
        taken = {c.id for c in state.commits} | {s.id for s in state.stash}
        if new_id in taken:
            raise RuntimeError(f"generated id '{new_id}' collides with an existing one")
        return new_id

    def _format_timestamp(self, timestamp: int) -> str:
        return datetime.fromtimestamp(timestamp / 1000).strftime(
            self.config.date_format
        )

    def _with_commit_on_current_branch(
        self, state: RepositoryState, commit: Commit, **changes
    ) -> RepositoryState:
        return replace(
            state,
            commits=(commit,) + state.commits,
            branches=tuple(
                replace(b, commits=(commit.id,) + b.commits)
                if b.name == state.current_branch
                else b
                for b in state.branches
            ),
            **changes,
        )

    def _resolve_remote(
        self, state: RepositoryState, name: Optional[str]
    ) -> RemoteRepository:
        if not state.remotes:
            raise PreconditionError("No remote repository configured")
        name = name or self.config.default_remote
        remote = state.find_remote(name)
        if remote is None:
            raise NotFoundError(f"remote '{name}' not found")
        return remote

    @staticmethod
    def _replace_remote(
        state: RepositoryState, remote: RemoteRepository
    ) -> Tuple[RemoteRepository, ...]:
        return tuple(remote if r.name == remote.name else r for r in state.remotes)

    # Basic commands

    def _init(self, state: RepositoryState, command: InitCommand) -> CommandOutcome:
        return CommandOutcome(
            state=create_sample_state(self.config, self._clock()),
            output="Initialized empty Git repository",
            steps=self._pace("init"),
        )

    def _status(self, state: RepositoryState, command: StatusCommand) -> CommandOutcome:
        lines = [f"On branch {state.current_branch}", f"HEAD -> {state.head}"]

        if state.staging_area:
            lines.append("Changes to be committed:")
            lines.extend(f"  {f.status.value}: {f.path}" for f in state.staging_area)

        if state.working_directory:
            lines.append("Changes not staged for commit:")
            lines.extend(
                f"  {f.status.value}: {f.path}" for f in state.working_directory
            )

        if not state.staging_area and not state.working_directory:
            lines.append("nothing to commit, working tree clean")

        return CommandOutcome(
            state=state, output=self._join(lines), steps=self._pace("status")
        )

    def _log(self, state: RepositoryState, command: LogCommand) -> CommandOutcome:
        entries = []
        for commit in state.commits:
            marker = " (HEAD)" if commit.id == state.head else ""
            entries.append(
                self._join(
                    [
                        f"commit {commit.id}{marker}",
                        f"Date: {self._format_timestamp(commit.timestamp)}",
                        "",
                        f"    {commit.message}",
                        "",
                    ]
                )
            )
        return CommandOutcome(
            state=state, output=self._join(entries), steps=self._pace("log")
        )

    def _add_all(self, state: RepositoryState, command: AddAllCommand) -> CommandOutcome:
        staged = (
            StagedFile(path=f.path, status=_staged_status_for(f.status))
            for f in state.working_directory
        )
        next_state = replace(
            state,
            staging_area=_merge_staged(state.staging_area, staged),
            working_directory=(),
        )
        return CommandOutcome(
            state=next_state,
            output="Changes staged successfully",
            steps=self._pace("add.all", None, "Adding all changes to staging area..."),
        )

    def _add_path(self, state: RepositoryState, command: AddPathCommand) -> CommandOutcome:
        working_file = state.find_working_file(command.path)
        if working_file is None:
            raise NotFoundError(f"pathspec '{command.path}' did not match any files")

        next_state = replace(
            state,
            staging_area=_merge_staged(
                state.staging_area,
                [
                    StagedFile(
                        path=command.path,
                        status=_staged_status_for(working_file.status),
                    )
                ],
            ),
            working_directory=tuple(
                f for f in state.working_directory if f.path != command.path
            ),
        )
        return CommandOutcome(
            state=next_state,
            output=f"Added '{command.path}' to staging area",
            steps=self._pace("add.path"),
        )

    def _commit(self, state: RepositoryState, command: CommitCommand) -> CommandOutcome:
        if not state.staging_area:
            raise PreconditionError("Nothing to commit, working tree clean")

        # New commits always hang off the root commit, not HEAD.
        commit = Commit(
            id=self._new_id(state),
            message=command.message,
            timestamp=self._clock(),
            parent=state.root_commit.id,
            author=self.config.author,
            email=self.config.email,
        )
        next_state = self._with_commit_on_current_branch(
            state, commit, staging_area=()
        )
        return CommandOutcome(
            state=next_state,
            output=f"[{state.current_branch} {commit.id}] {command.message}",
            steps=self._pace("commit", None, "Creating commit..."),
        )

    # Branching

    def _branch_list(
        self, state: RepositoryState, command: BranchListCommand
    ) -> CommandOutcome:
        lines = [
            f"{'* ' if b.name == state.current_branch else '  '}{b.name}"
            for b in state.branches
        ]
        return CommandOutcome(
            state=state, output=self._join(lines), steps=self._pace("branch.list")
        )

    def _fork_branch(self, state: RepositoryState, name: str) -> Tuple[Branch, ...]:
        if state.find_branch(name) is not None:
            raise PreconditionError(f"branch '{name}' already exists")
        return state.branches + (Branch(name=name, commits=state.active_branch.commits),)

    def _branch_create(
        self, state: RepositoryState, command: BranchCreateCommand
    ) -> CommandOutcome:
        next_state = replace(state, branches=self._fork_branch(state, command.name))
        return CommandOutcome(
            state=next_state,
            output=f"Created branch '{command.name}'",
            steps=self._pace("branch.create"),
        )

    def _branch_delete(
        self, state: RepositoryState, command: BranchDeleteCommand
    ) -> CommandOutcome:
        if command.name == state.current_branch:
            raise PreconditionError(
                f"Cannot delete the currently checked out branch '{command.name}'"
            )
        if state.find_branch(command.name) is None:
            raise NotFoundError(f"branch '{command.name}' not found")

        next_state = replace(
            state,
            branches=tuple(b for b in state.branches if b.name != command.name),
        )
        return CommandOutcome(
            state=next_state,
            output=f"Deleted branch {command.name}",
            steps=self._pace("branch.delete"),
        )

    def _checkout(self, state: RepositoryState, command: CheckoutCommand) -> CommandOutcome:
        if command.create:
            next_state = replace(
                state,
                branches=self._fork_branch(state, command.name),
                current_branch=command.name,
            )
            return CommandOutcome(
                state=next_state,
                output=f"Switched to a new branch '{command.name}'",
                steps=self._pace(
                    "checkout.create", None, f"Creating new branch '{command.name}'..."
                ),
            )

        if state.find_branch(command.name) is None:
            raise NotFoundError(f"branch '{command.name}' does not exist")

        return CommandOutcome(
            state=replace(state, current_branch=command.name),
            output=f"Switched to branch '{command.name}'",
            steps=self._pace("checkout"),
        )

    # History

    def _reset_hard(
        self, state: RepositoryState, command: ResetHardCommand
    ) -> CommandOutcome:
        target = state.find_commit(command.commit_id)
        if target is None:
            raise NotFoundError(f"commit {command.commit_id} does not exist")

        next_state = replace(
            state, head=target.id, staging_area=(), working_directory=()
        )
        return CommandOutcome(
            state=next_state,
            output=f"HEAD is now at {target.id[:7]} {target.message}",
            steps=self._pace("reset"),
        )

    def _revert(self, state: RepositoryState, command: RevertCommand) -> CommandOutcome:
        target = state.find_commit(command.commit_id)
        if target is None:
            raise NotFoundError(f"commit {command.commit_id} does not exist")

        commit = Commit(
            id=self._new_id(state),
            message=f'Revert "{target.message}"',
            timestamp=self._clock(),
            parent=state.head,
            author=self.config.author,
            email=self.config.email,
        )
        next_state = self._with_commit_on_current_branch(state, commit, head=commit.id)
        return CommandOutcome(
            state=next_state,
            output=f"Created revert commit {commit.id[:7]}",
            steps=self._pace("revert"),
        )

    # Stash

    def _stash_save(
        self, state: RepositoryState, command: StashSaveCommand
    ) -> CommandOutcome:
        if not state.working_directory and not state.staging_area:
            raise PreconditionError("No changes to stash")

        files = tuple(
            StashedFile(path=f.path, status=f.status, source=FileArea.WORKING)
            for f in state.working_directory
        ) + tuple(
            StashedFile(
                path=f.path,
                status=_stashed_status_for(f.status),
                source=FileArea.STAGED,
            )
            for f in state.staging_area
        )
        entry = StashEntry(
            id=self._new_id(state),
            message=command.message,
            timestamp=self._clock(),
            files=files,
        )
        next_state = replace(
            state,
            stash=(entry,) + state.stash,
            working_directory=(),
            staging_area=(),
        )
        return CommandOutcome(
            state=next_state,
            output=f"Saved working directory and index state: {command.message}",
            steps=self._pace("stash.save"),
        )

    def _stash_list(
        self, state: RepositoryState, command: StashListCommand
    ) -> CommandOutcome:
        lines = [
            f"stash@{{{index}}}: {entry.message}"
            for index, entry in enumerate(state.stash)
        ]
        return CommandOutcome(
            state=state,
            output=self._join(lines) or "No stash entries found",
            steps=self._pace("stash.list"),
        )

    def _stash_pop(self, state: RepositoryState, command: StashPopCommand) -> CommandOutcome:
        if not state.stash:
            raise PreconditionError("No stash entries found")

        entry, remaining = state.stash[0], state.stash[1:]
        # Only entries captured from the working directory come back.
        restored = tuple(
            WorkingFile(path=f.path, status=f.status)
            for f in entry.files
            if f.source == FileArea.WORKING
        )
        restored_paths = {f.path for f in restored}

        next_state = replace(
            state,
            stash=remaining,
            working_directory=tuple(
                f for f in state.working_directory if f.path not in restored_paths
            )
            + restored,
            staging_area=tuple(
                f for f in state.staging_area if f.path not in restored_paths
            ),
        )
        return CommandOutcome(
            state=next_state,
            output=f"Applied stash@{{0}}: {entry.message}",
            steps=self._pace("stash.pop"),
        )

    # Remotes

    def _remote_add(
        self, state: RepositoryState, command: RemoteAddCommand
    ) -> CommandOutcome:
        if state.find_remote(command.name) is not None:
            raise PreconditionError(f"remote {command.name} already exists")

        next_state = replace(
            state,
            remotes=state.remotes
            + (RemoteRepository(name=command.name, url=command.url),),
            current_remote=command.name,
        )
        return CommandOutcome(
            state=next_state,
            output=f"Remote '{command.name}' added with url '{command.url}'",
            steps=self._pace("remote.add"),
        )

    def _remote_show(
        self, state: RepositoryState, command: RemoteShowCommand
    ) -> CommandOutcome:
        remote = state.find_remote(command.name)
        if remote is None:
            raise NotFoundError(f"remote '{command.name}' not found")

        lines = [f"* remote {remote.name}", f"  URL: {remote.url}", "  Branches:"]
        lines.extend(f"    {b.name}" for b in remote.branches)
        lines.append("")
        return CommandOutcome(
            state=state, output=self._join(lines), steps=self._pace("remote.show")
        )

    def _push(self, state: RepositoryState, command: PushCommand) -> CommandOutcome:
        remote = self._resolve_remote(state, command.remote)
        branch_name = command.branch or state.current_branch
        # The current branch's history is what gets pushed, whatever the target.
        pushed = state.active_branch.commits

        remote_branch = RemoteBranch(
            name=branch_name, commits=pushed, last_commit=pushed[0]
        )
        if remote.find_branch(branch_name) is not None:
            remote_branches = tuple(
                remote_branch if b.name == branch_name else b for b in remote.branches
            )
        else:
            remote_branches = remote.branches + (remote_branch,)

        pushed_ids = set(pushed)
        known = {c.id for c in remote.commits}
        sent = tuple(
            c for c in state.commits if c.id in pushed_ids and c.id not in known
        )
        updated_remote = replace(
            remote, branches=remote_branches, commits=sent + remote.commits
        )

        next_state = replace(
            state,
            remotes=self._replace_remote(state, updated_remote),
            branches=tuple(
                replace(
                    b,
                    upstream=f"{remote.name}/{branch_name}",
                    ahead=0,
                    behind=0,
                )
                if b.name == branch_name
                else b
                for b in state.branches
            ),
            is_pushing_to_remote=False,
            remote_sync_status=SyncStatus.UP_TO_DATE,
        )
        return CommandOutcome(
            state=next_state,
            output=f"Branch '{branch_name}' pushed to '{remote.name}/{branch_name}'",
            steps=self._pace(
                "push",
                None,
                "Counting objects...",
                "Compressing objects...",
                "Writing objects...",
            ),
            interim_state=replace(state, is_pushing_to_remote=True),
        )

    def _fetch(self, state: RepositoryState, command: FetchCommand) -> CommandOutcome:
        remote = self._resolve_remote(state, command.remote)

        def refresh(branch: Branch) -> Branch:
            if not branch.upstream:
                return branch
            upstream_remote, _, upstream_branch = branch.upstream.partition("/")
            remote_branch = remote.find_branch(upstream_branch)
            if upstream_remote != remote.name or remote_branch is None:
                return branch
            behind = len(remote_branch.commits) - len(branch.commits)
            return replace(branch, behind=max(0, behind))

        branches = tuple(refresh(b) for b in state.branches)
        current = next(b for b in branches if b.name == state.current_branch)
        sync_status = (
            _sync_status_for(current) if current.upstream else state.remote_sync_status
        )

        next_state = replace(
            state,
            branches=branches,
            is_fetching_from_remote=False,
            remote_sync_status=sync_status,
        )
        return CommandOutcome(
            state=next_state,
            output="Remote changes fetched successfully",
            steps=self._pace("fetch", None, f"Fetching {remote.name}..."),
            interim_state=replace(state, is_fetching_from_remote=True),
        )

    def _pull(self, state: RepositoryState, command: PullCommand) -> CommandOutcome:
        remote = self._resolve_remote(state, command.remote)
        steps = self._pace(
            "pull", None, f"Fetching {remote.name}...", "Updating local branch..."
        )
        interim = replace(state, is_fetching_from_remote=True)

        remote_branch = remote.find_branch(state.current_branch)
        if remote_branch is None:
            return CommandOutcome(
                state=state,
                output="Successfully pulled changes",
                steps=steps,
                interim_state=interim,
            )

        known = {c.id for c in state.commits}
        timestamp = self._clock()
        received = []
        for commit_id in remote_branch.commits:
            if commit_id in known:
                continue
            received.append(
                remote.find_commit(commit_id)
                or Commit(
                    id=commit_id,
                    message=f"Remote commit {commit_id}",
                    timestamp=timestamp,
                    parent=None,
                    author=self.config.remote_author,
                    email=self.config.remote_email,
                )
            )
            known.add(commit_id)

        next_state = replace(
            state,
            branches=tuple(
                replace(b, commits=remote_branch.commits, ahead=0, behind=0)
                if b.name == state.current_branch
                else b
                for b in state.branches
            ),
            commits=tuple(received) + state.commits,
            is_fetching_from_remote=False,
            remote_sync_status=SyncStatus.UP_TO_DATE,
        )
        return CommandOutcome(
            state=next_state,
            output="Successfully pulled changes",
            steps=steps,
            interim_state=interim,
        )

    def _clone(self, state: RepositoryState, command: CloneCommand) -> CommandOutcome:
        name = repository_name_from_url(command.url)
        return CommandOutcome(
            state=create_cloned_state(command.url, self.config, self._clock()),
            output="Repository cloned successfully",
            steps=self._pace(
                "clone",
                None,
                f"Cloning into '{name}'...",
                "Counting objects...",
                "Receiving objects...",
            ),
        )

    def _no_op(self, state: RepositoryState, command: NoOpCommand) -> CommandOutcome:
        logger.debug(
            "Ignoring unsupported argument shape",
            extra={"subcommand": command.subcommand},
        )
        return CommandOutcome(state=state, output="")
