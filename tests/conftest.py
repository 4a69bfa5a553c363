"""Shared fakes for the session controller tests."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import pytest


class FakeProvider:
    """Provider whose replies are futures the test settles explicitly."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.futures: list[asyncio.Future] = []

    async def generate_reply(self, text: str) -> str:
        fut = asyncio.get_running_loop().create_future()
        self.calls.append(text)
        self.futures.append(fut)
        return await fut

    def resolve(self, reply: str, index: int = -1) -> None:
        self.futures[index].set_result(reply)

    def fail(self, error: BaseException, index: int = -1) -> None:
        self.futures[index].set_exception(error)


class RecordingSink:
    def __init__(self) -> None:
        self.failures: list[tuple] = []

    def record_failure(self, session_id, text, error) -> None:
        self.failures.append((session_id, text, error))


class StepClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self) -> None:
        self.now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


async def tick(times: int = 3) -> None:
    """Let scheduled tasks run up to their next suspension point."""
    for _ in range(times):
        await asyncio.sleep(0)


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def clock() -> StepClock:
    return StepClock()
