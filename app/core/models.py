"""
Canonical data shapes, shared truth for typing between layers.

Typical contents:
- Origin (who wrote a message).
- Message (id, content, origin, created_at).
- SessionState (the controller-owned mutable state of the active session).
- SessionSnapshot (read-only view handed to the UI and listeners).
- LLMSettings (model, temperature, top_p, max_tokens).

Testing: Trivial; mostly types.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional
from enum import Enum
from datetime import datetime


class Origin(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    id: str
    content: str
    origin: Origin
    created_at: datetime

    @property
    def is_user(self) -> bool:
        return self.origin == Origin.USER


@dataclass
class SessionState:
    session_id: Optional[str] = None
    transcript: list[Message] = field(default_factory=list)
    pending: bool = False
    draft_input: str = ""

    # Bumped on every session switch; outstanding requests carry the value
    # they were issued under.
    epoch: int = 0


@dataclass(frozen=True)
class SessionSnapshot:
    session_id: Optional[str]
    transcript: tuple[Message, ...]
    pending: bool
    draft_input: str

    @property
    def is_empty(self) -> bool:
        return not self.transcript


@dataclass
class LLMSettings:
    model: str
    temperature: float = 0.7
    top_p: float = 1.0
    max_tokens: int = 512
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.0
