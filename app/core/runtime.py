"""
Purpose: Give the (synchronous, rerun-driven) Streamlit script a single
long-lived asyncio loop to run the controller on.

The loop lives in a daemon thread. The script thread never touches controller
state directly; it hands callables/coroutines to the loop and waits for the
result, so every state mutation still happens on that one loop.
"""

from __future__ import annotations
import asyncio
import logging
import threading
from typing import Any, Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LoopRunner:
    def __init__(self, name: str = "digit-session-loop") -> None:
        self.loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        asyncio.set_event_loop(self.loop)
        self.loop.run_forever()

    @property
    def running(self) -> bool:
        return self._thread.is_alive() and not self.loop.is_closed()

    def run(self, coro: Awaitable[T], timeout: Optional[float] = None) -> T:
        """Run a coroutine on the loop and block until it finishes."""
        fut = asyncio.run_coroutine_threadsafe(coro, self.loop)
        return fut.result(timeout)

    def call(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run a plain callable on the loop thread and return its result."""

        async def _invoke() -> T:
            return fn(*args, **kwargs)

        return self.run(_invoke())

    def stop(self, timeout: float = 5.0) -> None:
        """Stop the loop and join its thread."""
        if self.loop.is_closed():
            return
        self.loop.call_soon_threadsafe(self.loop.stop)
        self._thread.join(timeout)
        if not self._thread.is_alive():
            self.loop.close()
        else:
            logger.warning("Event loop thread did not stop within %.1fs", timeout)
