"""Tests for the background event loop used by the Streamlit script."""

from __future__ import annotations

import asyncio
import threading

import pytest

from core.controller import ConversationSessionController
from core.models import Origin
from core.runtime import LoopRunner
from core.services.canned import KeywordResponseProvider


@pytest.fixture
def runner():
    r = LoopRunner()
    yield r
    r.stop()


def test_call_runs_on_loop_thread(runner):
    main = threading.get_ident()
    ident = runner.call(threading.get_ident)
    assert ident != main


def test_call_sees_running_loop(runner):
    assert runner.call(asyncio.get_running_loop) is runner.loop


def test_call_propagates_errors(runner):
    def boom():
        raise ValueError("bad")

    with pytest.raises(ValueError, match="bad"):
        runner.call(boom)


def test_run_returns_coroutine_result(runner):
    async def add(a, b):
        await asyncio.sleep(0)
        return a + b

    assert runner.run(add(2, 3)) == 5


def test_stop_closes_loop():
    r = LoopRunner()
    assert r.running
    r.stop()
    assert not r.running
    r.stop()


def test_controller_round_trip_through_runner(runner):
    provider = KeywordResponseProvider(min_latency=0.0, max_latency=0.0)
    controller = runner.call(ConversationSessionController, provider)
    settled = threading.Event()
    runner.call(
        controller.subscribe, lambda snap: settled.set() if not snap.pending else None
    )

    runner.call(controller.set_session, "s1")
    settled.clear()
    runner.call(controller.submit, "hello")

    assert settled.wait(2.0)
    snap = runner.call(controller.snapshot)
    assert [m.origin for m in snap.transcript] == [Origin.USER, Origin.ASSISTANT]
    assert snap.pending is False
