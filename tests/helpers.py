"""
Test doubles shared across the Git Playground test suite.
"""

import asyncio
from typing import List

from git_playground.models.repository import RepositoryState


class SequentialIds:
    """Deterministic commit id source: c000001, c000002, ..."""

    def __init__(self):
        self.counter = 0

    def __call__(self) -> str:
        self.counter += 1
        return f"c{self.counter:06d}"


class RecordingSleep:
    """Async sleep replacement that records requested durations."""

    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class GateSleep:
    """Sleep replacement that blocks until released."""

    def __init__(self):
        self.entered = asyncio.Event()
        self.release = asyncio.Event()

    async def __call__(self, seconds: float) -> None:
        self.entered.set()
        await self.release.wait()


class RecordingListener:
    """Session listener collecting everything published to it."""

    def __init__(self):
        self.progress: List[str] = []
        self.published: List[tuple] = []

    def on_progress(self, message: str) -> None:
        self.progress.append(message)

    def on_publish(self, state: RepositoryState, output: str) -> None:
        self.published.append((state, output))
