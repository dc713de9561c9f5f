"""Completion provider backed by the OpenAI chat completions API."""
from __future__ import annotations

import logging
from typing import Any, Optional

from openai import AsyncOpenAI

LOGGER = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-3.5-turbo"


class OpenAICompletionProvider:
    """Send single-message prompts and return the first choice's text."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        model: str = DEFAULT_MODEL,
        client: Optional[Any] = None,
    ) -> None:
        self.model = model
        self._client = client or AsyncOpenAI(api_key=api_key)

    async def complete(self, prompt: str, *, max_tokens: int, temperature: float = 0.2) -> str:
        LOGGER.debug("Requesting completion (%s tokens) from %s", max_tokens, self.model)
        completion = await self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=max_tokens,
            temperature=temperature,
        )
        if not completion.choices:
            return ""
        return (completion.choices[0].message.content or "").strip()

    async def aclose(self) -> None:
        close = getattr(self._client, "close", None)
        if close is not None:
            await close()


__all__ = ["DEFAULT_MODEL", "OpenAICompletionProvider"]
