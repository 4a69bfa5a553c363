"""
Purpose: Static content behind the navigation sidebar.
- Recent conversations the user can switch to.
- Quick questions: canned issue descriptions that open a new chat.
- Fresh session id generation for "New Chat" and quick questions.

Nothing here holds session state; switching happens through core.events.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
from uuid import uuid4

from .formatting import utc_now


@dataclass(frozen=True)
class ChatSummary:
    id: str
    title: str
    last_active: datetime


def _ago(**kwargs) -> datetime:
    return utc_now() - timedelta(**kwargs)


RECENT_CHATS: tuple[ChatSummary, ...] = (
    ChatSummary("1", "Claims Processing SOP", _ago(hours=2)),
    ChatSummary("2", "Customer Onboarding", _ago(days=1)),
    ChatSummary("3", "Policy Renewal Process", _ago(days=3)),
    ChatSummary("4", "Underwriting Guidelines", _ago(weeks=1)),
)

QUICK_QUESTIONS: tuple[str, ...] = (
    "Build failed",
    "Deployment is stuck in pending",
    "Cannot log in to the portal",
    "Application is running slowly",
    "Database connection timeout",
    "Email notifications not sent",
)


def new_session_id(previous: Optional[str] = None) -> str:
    """Return an opaque session id that differs from `previous`."""
    session_id = uuid4().hex
    while session_id == previous:
        session_id = uuid4().hex
    return session_id


def find_chat(chat_id: Optional[str]) -> Optional[ChatSummary]:
    """Look up a recent conversation by id; None for new or unknown chats."""
    return next((c for c in RECENT_CHATS if c.id == chat_id), None)
