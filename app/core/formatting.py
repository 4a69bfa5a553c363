"""Timestamp and id helpers shared by the controller and the UI."""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


def make_message_id(created_at: datetime, seq: int) -> str:
    """Time-based id with a sequence suffix so ids created in the same
    millisecond stay distinct and ordered."""
    millis = int(created_at.timestamp() * 1000)
    return f"{millis}-{seq}"


def format_timestamp(dt: datetime) -> str:
    """Render a message time as HH:MM in local time."""
    if dt.tzinfo is not None:
        dt = dt.astimezone()
    return dt.strftime("%H:%M")


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}{'' if n == 1 else 's'} ago"


def format_relative(then: datetime, now: Optional[datetime] = None) -> str:
    """
    Human label for how long ago `then` was, e.g. "2 hours ago".
    Future times and anything under a minute read as "just now".
    """
    now = now or utc_now()
    seconds = int((now - then).total_seconds())
    if seconds < 60:
        return "just now"
    minutes = seconds // 60
    if minutes < 60:
        return _plural(minutes, "minute")
    hours = minutes // 60
    if hours < 24:
        return _plural(hours, "hour")
    days = hours // 24
    if days < 7:
        return _plural(days, "day")
    weeks = days // 7
    if weeks < 5:
        return _plural(weeks, "week")
    return then.strftime("%Y-%m-%d")
