"""
Session controller for the Git Playground simulator.

This module owns the single live repository snapshot. It serializes
command execution, plays back the simulated latency of each command and
publishes the resulting snapshot and transcript to registered listeners.
"""

import asyncio
from typing import Awaitable, Callable, List, Optional, Tuple

from ..components.command_interpreter import CommandInterpreter
from ..components.repository_factory import create_initial_state
from ..interfaces import ICommandInterpreter, ISessionListener
from ..models.config import SimulatorConfig
from ..models.outcome import CommandOutcome
from ..models.repository import RepositoryState
from ..utils.error_handling import ErrorCategory, ErrorTracker, get_error_tracker
from ..utils.logging import get_logger

logger = get_logger("session.controller")

COMPONENT = "session.controller"


class SessionController:
    """
    Owns the current repository snapshot and gates access to it.

    At most one command runs at a time; commands submitted while another is
    in flight are dropped rather than queued. ``reset`` may be called at any
    time and wins over a command that was already running.
    """

    def __init__(
        self,
        interpreter: Optional[ICommandInterpreter] = None,
        config: Optional[SimulatorConfig] = None,
        initial_state: Optional[RepositoryState] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
        error_tracker: Optional[ErrorTracker] = None,
    ):
        """
        Initialize the session.

        Args:
            interpreter: Command interpreter; built from ``config`` when omitted
            config: Simulator configuration
            initial_state: Starting snapshot; a fresh repository when omitted
            sleep: Awaitable used for simulated delays, in seconds
            error_tracker: Tracker for failed commands
        """
        self.config = config or SimulatorConfig()
        self.interpreter = interpreter or CommandInterpreter(self.config)
        self.error_tracker = error_tracker or get_error_tracker()
        self._sleep = sleep or asyncio.sleep

        self._state = initial_state or create_initial_state(self.config)
        self._output = ""
        self._busy = False
        self._resetting = False
        self._generation = 0
        self._history: List[str] = []
        self._listeners: List[ISessionListener] = []

        logger.info("Session started", extra={"head": self._state.head})

    @property
    def state(self) -> RepositoryState:
        return self._state

    @property
    def output(self) -> str:
        return self._output

    @property
    def is_busy(self) -> bool:
        return self._busy or self._resetting

    @property
    def history(self) -> Tuple[str, ...]:
        return tuple(self._history)

    def add_listener(self, listener: ISessionListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: ISessionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def execute(self, command_line: str) -> Optional[CommandOutcome]:
        """
        Execute one command line.

        Args:
            command_line: Raw command text

        Returns:
            The published outcome, or None when the command was dropped
            because the session was busy or was superseded by a reset
        """
        if self.is_busy:
            logger.warning("Command dropped while busy", extra={"command": command_line})
            return None

        self._busy = True
        generation = self._generation
        try:
            outcome = self._interpret(command_line)
            self._history.append(command_line)

            await self._play(outcome)

            if generation != self._generation:
                logger.warning(
                    "Discarding result superseded by reset",
                    extra={"command": command_line},
                )
                return None

            self._publish(outcome.state, outcome.output)
            return outcome
        finally:
            self._busy = False

    def submit(self, command_line: str) -> Optional["asyncio.Task"]:
        """
        Fire-and-forget variant of ``execute`` for terminal front ends.

        Returns:
            The scheduled task, or None when the session is busy
        """
        if self.is_busy:
            logger.warning("Command dropped while busy", extra={"command": command_line})
            return None
        return asyncio.get_running_loop().create_task(self.execute(command_line))

    async def reset(self) -> CommandOutcome:
        """Replace the snapshot with the sample repository."""
        self._resetting = True
        try:
            outcome = self.interpreter.reset_playground()
            await self._play(outcome)
            self._generation += 1
            self._publish(outcome.state, outcome.output)
            logger.info("Playground reset")
            return outcome
        finally:
            self._resetting = False

    def get_error_stats(self):
        return self.error_tracker.get_error_stats()

    def _interpret(self, command_line: str) -> CommandOutcome:
        try:
            outcome = self.interpreter.interpret(self._state, command_line)
        except Exception as e:
            logger.error(
                "Unexpected failure while interpreting command",
                extra={"command": command_line, "error": str(e)},
                exc_info=True,
            )
            self.error_tracker.record_error(
                component=COMPONENT,
                category=ErrorCategory.INTERNAL,
                message=str(e),
                exception=e,
                context={"command": command_line},
            )
            return CommandOutcome(
                state=self._state,
                output=f"Error: {e}",
                succeeded=False,
                error_category=ErrorCategory.INTERNAL,
            )

        if not outcome.succeeded:
            self.error_tracker.record_error(
                component=COMPONENT,
                category=outcome.error_category or ErrorCategory.INTERNAL,
                message=outcome.output,
                context={"command": command_line},
            )
        return outcome

    async def _play(self, outcome: CommandOutcome) -> None:
        """Publish the interim snapshot and run the pacing steps in order."""
        previous = self._state
        if outcome.interim_state is not None:
            self._state = outcome.interim_state
            self._notify_publish(self._state, self._output)

        try:
            for step in outcome.steps:
                if step.message:
                    self._notify_progress(step.message)
                seconds = step.delay_ms * self.config.time_scale / 1000
                if seconds > 0:
                    await self._sleep(seconds)
        except asyncio.CancelledError:
            # Only undo our own interim snapshot; a reset may have replaced it.
            if (
                outcome.interim_state is not None
                and self._state is outcome.interim_state
            ):
                self._state = previous
                self._notify_publish(self._state, self._output)
            raise

    def _publish(self, state: RepositoryState, output: str) -> None:
        self._state = state
        self._output = output
        self._notify_publish(state, output)

    def _notify_progress(self, message: str) -> None:
        for listener in list(self._listeners):
            try:
                listener.on_progress(message)
            except Exception as e:
                logger.error(
                    "Listener failed on progress", extra={"error": str(e)}, exc_info=True
                )

    def _notify_publish(self, state: RepositoryState, output: str) -> None:
        for listener in list(self._listeners):
            try:
                listener.on_publish(state, output)
            except Exception as e:
                logger.error(
                    "Listener failed on publish", extra={"error": str(e)}, exc_info=True
                )
