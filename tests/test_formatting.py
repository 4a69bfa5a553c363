"""Tests for timestamp helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from core.formatting import format_relative, format_timestamp, make_message_id, utc_now

NOW = datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)


def test_utc_now_is_timezone_aware():
    assert utc_now().tzinfo is not None


def test_format_timestamp_naive():
    assert format_timestamp(datetime(2024, 5, 10, 9, 5)) == "09:05"


def test_format_timestamp_aware_uses_local_time():
    dt = datetime(2024, 5, 10, 9, 5, tzinfo=timezone.utc)
    assert format_timestamp(dt) == dt.astimezone().strftime("%H:%M")


@pytest.mark.parametrize(
    "delta, expected",
    [
        (timedelta(seconds=10), "just now"),
        (timedelta(seconds=-30), "just now"),
        (timedelta(minutes=1), "1 minute ago"),
        (timedelta(minutes=5), "5 minutes ago"),
        (timedelta(hours=2), "2 hours ago"),
        (timedelta(days=1), "1 day ago"),
        (timedelta(days=3), "3 days ago"),
        (timedelta(weeks=1), "1 week ago"),
        (timedelta(weeks=3), "3 weeks ago"),
    ],
)
def test_format_relative(delta, expected):
    assert format_relative(NOW - delta, NOW) == expected


def test_format_relative_falls_back_to_date():
    assert format_relative(NOW - timedelta(days=60), NOW) == "2024-03-11"


def test_make_message_id_orders_within_same_millisecond():
    a = make_message_id(NOW, 1)
    b = make_message_id(NOW, 2)
    assert a != b
    assert a.split("-")[0] == b.split("-")[0] == str(int(NOW.timestamp() * 1000))
