"""Choose the ResponseProvider named in Settings."""

from __future__ import annotations

from ..config import Settings
from ..interfaces import ResponseProvider
from ..models import LLMSettings
from .canned import KeywordResponseProvider


def build_provider(settings: Settings) -> ResponseProvider:
    if settings.provider == "canned":
        return KeywordResponseProvider(
            min_latency=settings.min_latency, max_latency=settings.max_latency
        )
    if settings.provider == "openai":
        from .llm_openai import OpenAIResponseProvider

        return OpenAIResponseProvider(
            api_key=settings.openai_api_key,
            settings=LLMSettings(
                model=settings.model,
                temperature=settings.temperature,
                max_tokens=settings.max_tokens,
            ),
        )
    raise ValueError(f"Unknown provider: {settings.provider!r}")
