"""Tests for environment settings and logging setup."""

from __future__ import annotations

import logging

import pytest

from core.config import Settings, load_settings
from core.logging_setup import configure_logging


def test_defaults():
    settings = load_settings({})
    assert settings == Settings()
    assert settings.reply_timeout is None


def test_values_are_parsed():
    settings = load_settings(
        {
            "DIGIT_PROVIDER": "OpenAI",
            "OPENAI_API_KEY": " sk-test ",
            "DIGIT_MODEL": "gpt-4o",
            "DIGIT_TEMPERATURE": "0.2",
            "DIGIT_MAX_TOKENS": "256",
            "DIGIT_MIN_LATENCY": "0",
            "DIGIT_MAX_LATENCY": "0.5",
            "DIGIT_REPLY_TIMEOUT": "30",
            "DIGIT_LOG_LEVEL": "debug",
        }
    )
    assert settings.provider == "openai"
    assert settings.openai_api_key == "sk-test"
    assert settings.model == "gpt-4o"
    assert settings.temperature == 0.2
    assert settings.max_tokens == 256
    assert (settings.min_latency, settings.max_latency) == (0.0, 0.5)
    assert settings.reply_timeout == 30.0
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "env, message",
    [
        ({"DIGIT_PROVIDER": "magic"}, "DIGIT_PROVIDER"),
        ({"DIGIT_TEMPERATURE": "warm"}, "DIGIT_TEMPERATURE"),
        ({"DIGIT_MAX_TOKENS": "1.5"}, "DIGIT_MAX_TOKENS"),
        ({"DIGIT_MIN_LATENCY": "2", "DIGIT_MAX_LATENCY": "1"}, "DIGIT_MIN_LATENCY"),
        ({"DIGIT_MIN_LATENCY": "-1"}, "DIGIT_MIN_LATENCY"),
        ({"DIGIT_REPLY_TIMEOUT": "0"}, "DIGIT_REPLY_TIMEOUT"),
        ({"DIGIT_REPLY_TIMEOUT": "soon"}, "DIGIT_REPLY_TIMEOUT"),
    ],
)
def test_invalid_values(env, message):
    with pytest.raises(ValueError, match=message):
        load_settings(env)


def test_reads_dotenv_file(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("DIGIT_MODEL=from-dotenv\n")
    monkeypatch.chdir(tmp_path)
    # setenv first so teardown restores the variable's original absence
    monkeypatch.setenv("DIGIT_MODEL", "placeholder")
    monkeypatch.delenv("DIGIT_MODEL")

    assert load_settings().model == "from-dotenv"


def test_configure_logging_is_idempotent():
    root = logging.getLogger()
    before = list(root.handlers)
    old_level = root.level
    try:
        configure_logging("DEBUG")
        configure_logging(logging.WARNING)
        added = [h for h in root.handlers if h not in before]
        assert len(added) == 1
        assert root.level == logging.WARNING
    finally:
        for h in root.handlers[:]:
            if h not in before:
                root.removeHandler(h)
        root.setLevel(old_level)


def test_configure_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        configure_logging("LOUD")
