"""
Purpose: Thin async wrapper around OpenAI used as a ResponseProvider.
One place for auth, retries, model options and reply normalization.

Extensibility:
- Add other providers without touching the controller; anything with
  `async generate_reply(text) -> str` fits.

Testing: Pass a fake client exposing `chat.completions.create`; assert the
payload and retry behavior.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Optional

from openai import AsyncOpenAI
from openai import APIError, RateLimitError, APITimeoutError

from ..models import LLMSettings
from ..prompts import assistant_system_prompt

logger = logging.getLogger(__name__)

RETRY_DELAYS = (0.5, 1.0, 2.0, 4.0)


class OpenAIResponseProvider:
    def __init__(
        self,
        api_key: str,
        settings: LLMSettings,
        *,
        system: Optional[str] = None,
        client=None,
        retry_delays: tuple[float, ...] = RETRY_DELAYS,
    ):
        self.api_key = api_key
        if not self.api_key and client is None:
            raise RuntimeError("Missing OPENAI_API_KEY")
        self.settings = settings
        self.system = system if system is not None else assistant_system_prompt()
        self.retry_delays = retry_delays
        if client is not None:
            self.client = client
        else:
            try:
                self.client = AsyncOpenAI(api_key=self.api_key)
            except Exception as e:
                raise RuntimeError(f"Failed to initialize OpenAI client: {e}") from e

    async def _with_retries(self, fn, *args, **kwargs):
        for delay in self.retry_delays:
            try:
                return await fn(*args, **kwargs)
            except (RateLimitError, APITimeoutError, APIError) as e:
                logger.warning("OpenAI call failed (%s), retrying in %.1fs", e, delay)
                await asyncio.sleep(delay)
        return await fn(*args, **kwargs)

    async def generate_reply(self, text: str) -> str:
        payload = []
        if self.system:
            payload.append({"role": "system", "content": self.system})
        payload.append({"role": "user", "content": text})

        s = self.settings
        cc = await self._with_retries(
            self.client.chat.completions.create,
            model=s.model,
            messages=payload,
            temperature=s.temperature,
            top_p=s.top_p,
            max_tokens=s.max_tokens,
            frequency_penalty=s.frequency_penalty,
            presence_penalty=s.presence_penalty,
        )
        reply = (cc.choices[0].message.content or "").strip()
        usage = getattr(cc, "usage", None)
        logger.debug(
            "OpenAI reply: model=%s tokens_in=%s tokens_out=%s",
            getattr(cc, "model", s.model),
            getattr(usage, "prompt_tokens", 0) if usage else 0,
            getattr(usage, "completion_tokens", 0) if usage else 0,
        )
        if not reply:
            raise ValueError("Empty reply from model.")
        return reply
