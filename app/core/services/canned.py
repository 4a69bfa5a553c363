"""
Purpose: Offline reply backend. Matches keywords in the user's text against an
ordered rule table and answers after a simulated latency.
Lets the app run with no API key and gives tests a deterministic provider
(inject `sleep` and `rng`).
"""

from __future__ import annotations
import asyncio
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Sequence

from ..prompts import DEFAULT_REPLY


@dataclass(frozen=True)
class KeywordRule:
    keywords: tuple[str, ...]
    reply: str

    def matches(self, text: str) -> bool:
        t = text.lower()
        return any(k in t for k in self.keywords)


DEFAULT_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        ("build failed", "compile", "build error"),
        "Build failures usually come from one of three places:\n\n"
        "1. **Dependencies**: a version changed upstream. Pin versions and "
        "clear the build cache.\n"
        "2. **Environment**: a missing variable or tool on the build agent.\n"
        "3. **Code**: check the first error in the log, not the last.\n\n"
        "Can you share the first error line from the build log?",
    ),
    KeywordRule(
        ("deploy", "rollout", "release"),
        "For a stuck deployment:\n\n"
        "1. Check the health checks of the new instances.\n"
        "2. Look for failing readiness probes or missing secrets.\n"
        "3. Roll back to the last good version if users are affected.\n\n"
        "Which environment is the deployment targeting?",
    ),
    KeywordRule(
        ("log in", "login", "password", "sign in"),
        "Login problems are most often caused by:\n\n"
        "- an expired password or locked account,\n"
        "- cached credentials in the browser,\n"
        "- single sign-on misconfiguration.\n\n"
        "Try a private browser window first. Do you see an error message?",
    ),
    KeywordRule(
        ("slow", "performance", "latency"),
        "To narrow down slowness:\n\n"
        "1. Compare response times for a simple page and a heavy one.\n"
        "2. Check CPU, memory and database load at the same time.\n"
        "3. Look for recent releases that line up with the slowdown.\n\n"
        "When did you first notice it?",
    ),
    KeywordRule(
        ("database", "connection", "timeout"),
        "Connection timeouts usually point to the network path or an "
        "exhausted pool:\n\n"
        "1. Verify the host and port are reachable from the app server.\n"
        "2. Check the connection pool size against active connections.\n"
        "3. Review slow queries holding connections open.\n\n"
        "Is this happening constantly or only under load?",
    ),
    KeywordRule(
        ("email", "notification"),
        "If notifications are not arriving:\n\n"
        "1. Check the outbound mail queue and bounce logs.\n"
        "2. Confirm the sender domain's SPF/DKIM records.\n"
        "3. Ask recipients to check their spam folder.\n\n"
        "Are all notifications missing or only some types?",
    ),
    KeywordRule(
        ("hello", "hi ", "hey"),
        "Hello! How can I help you today?",
    ),
)


class KeywordResponseProvider:
    def __init__(
        self,
        rules: Sequence[KeywordRule] = DEFAULT_RULES,
        *,
        default_reply: str = DEFAULT_REPLY,
        min_latency: float = 1.0,
        max_latency: float = 3.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rng: Optional[random.Random] = None,
    ):
        if min_latency < 0 or max_latency < min_latency:
            raise ValueError(
                f"Invalid latency range: {min_latency!r}..{max_latency!r}"
            )
        self.rules = tuple(rules)
        self.default_reply = default_reply
        self.min_latency = min_latency
        self.max_latency = max_latency
        self._sleep = sleep
        self._rng = rng or random.Random()

    def pick_reply(self, text: str) -> str:
        """First matching rule wins; falls back to the default reply."""
        rule = next((r for r in self.rules if r.matches(text)), None)
        return rule.reply if rule else self.default_reply

    async def generate_reply(self, text: str) -> str:
        delay = self._rng.uniform(self.min_latency, self.max_latency)
        await self._sleep(delay)
        return self.pick_reply(text)
