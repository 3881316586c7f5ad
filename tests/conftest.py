"""
Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Git Playground test suite.
"""

from typing import Callable

import pytest

from git_playground.components.command_interpreter import CommandInterpreter
from git_playground.components.repository_factory import (
    create_initial_state,
    create_sample_state,
)
from git_playground.models.config import SimulatorConfig
from git_playground.models.repository import RepositoryState
from git_playground.services.session_controller import SessionController
from git_playground.utils.error_handling import ErrorTracker

from .helpers import RecordingListener, RecordingSleep, SequentialIds

FIXED_TIMESTAMP = 1704110400000  # 2024-01-01T12:00:00Z


@pytest.fixture
def config() -> SimulatorConfig:
    """Configuration in deterministic test mode (no waiting)."""
    return SimulatorConfig(time_scale=0)


@pytest.fixture
def id_generator() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def clock() -> Callable[[], int]:
    return lambda: FIXED_TIMESTAMP


@pytest.fixture
def interpreter(config, id_generator, clock) -> CommandInterpreter:
    return CommandInterpreter(config, id_generator=id_generator, clock=clock)


@pytest.fixture
def initial_state(config) -> RepositoryState:
    return create_initial_state(config, timestamp=FIXED_TIMESTAMP)


@pytest.fixture
def sample_state(config) -> RepositoryState:
    return create_sample_state(config, timestamp=FIXED_TIMESTAMP)


@pytest.fixture
def run(interpreter):
    """Run a sequence of command lines, returning the last outcome."""

    def _run(state: RepositoryState, *command_lines: str):
        outcome = None
        for line in command_lines:
            outcome = interpreter.interpret(state, line)
            state = outcome.state
        return outcome

    return _run


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def session(interpreter, config, initial_state, recording_sleep, listener):
    controller = SessionController(
        interpreter=interpreter,
        config=config,
        initial_state=initial_state,
        sleep=recording_sleep,
        error_tracker=ErrorTracker(),
    )
    controller.add_listener(listener)
    return controller


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")


def pytest_collection_modifyitems(config, items):
    """Add the unit marker to every test not marked otherwise."""
    for item in items:
        if not any(
            marker.name in ["integration", "slow"] for marker in item.iter_markers()
        ):
            item.add_marker(pytest.mark.unit)
