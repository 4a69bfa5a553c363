"""
Abstractions for pluggable collaborators. Inversion of control: the controller
depends on these protocols, not on concrete services. Enables fakes in tests
and swapping the reply backend without touching the controller.

Common protocols:
- ResponseProvider.generate_reply(text) -> reply text (awaitable)
- SessionListener(snapshot) -> None, called after every state change
- FailureSink.record_failure(session_id, text, error) -> None

Testing: Use simple fake implementations to drive the controller without
network calls or real latency.
"""

from __future__ import annotations
from typing import Optional, Protocol
from .models import SessionSnapshot


class ResponseProvider(Protocol):
    async def generate_reply(self, text: str) -> str: ...


class SessionListener(Protocol):
    def __call__(self, snapshot: SessionSnapshot) -> None: ...


class FailureSink(Protocol):
    def record_failure(
        self, session_id: Optional[str], text: str, error: BaseException
    ) -> None: ...
