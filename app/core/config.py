"""
Purpose: Runtime settings read from the environment (a .env file is loaded
first when present). One place for defaults and validation so the UI and
the provider factory never parse env vars themselves.
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

PROVIDERS = ("canned", "openai")


@dataclass(frozen=True)
class Settings:
    provider: str = "canned"
    openai_api_key: str = ""
    model: str = "gpt-4o-mini"
    temperature: float = 0.7
    max_tokens: int = 512
    min_latency: float = 1.0
    max_latency: float = 3.0
    reply_timeout: Optional[float] = None
    log_level: str = "INFO"


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from `env` (defaults to os.environ after loading .env).
    Raises ValueError on malformed or inconsistent values.
    """
    if env is None:
        load_dotenv(find_dotenv(usecwd=True))
        env = os.environ

    provider = (env.get("DIGIT_PROVIDER") or "canned").strip().lower()
    if provider not in PROVIDERS:
        raise ValueError(
            f"DIGIT_PROVIDER must be one of {', '.join(PROVIDERS)}, got {provider!r}"
        )

    min_latency = _float(env, "DIGIT_MIN_LATENCY", 1.0)
    max_latency = _float(env, "DIGIT_MAX_LATENCY", 3.0)
    if min_latency < 0 or max_latency < min_latency:
        raise ValueError(
            "DIGIT_MIN_LATENCY/DIGIT_MAX_LATENCY must satisfy 0 <= min <= max"
        )

    timeout_raw = (env.get("DIGIT_REPLY_TIMEOUT") or "").strip()
    reply_timeout = None
    if timeout_raw:
        reply_timeout = _float(env, "DIGIT_REPLY_TIMEOUT", 0.0)
        if reply_timeout <= 0:
            raise ValueError("DIGIT_REPLY_TIMEOUT must be positive when set")

    return Settings(
        provider=provider,
        openai_api_key=(env.get("OPENAI_API_KEY") or "").strip(),
        model=(env.get("DIGIT_MODEL") or "gpt-4o-mini").strip(),
        temperature=_float(env, "DIGIT_TEMPERATURE", 0.7),
        max_tokens=_int(env, "DIGIT_MAX_TOKENS", 512),
        min_latency=min_latency,
        max_latency=max_latency,
        reply_timeout=reply_timeout,
        log_level=(env.get("DIGIT_LOG_LEVEL") or "INFO").strip().upper(),
    )
