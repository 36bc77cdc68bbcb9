"""Throttled wrapper around the Anthropic Messages API."""

from __future__ import annotations

import json
import logging
from typing import Any

from anthropic import Anthropic, APIError
from anthropic.types import TextBlock

from bizcoach.config import Settings
from bizcoach.errors import UpstreamError
from bizcoach.llm.rate_limit import RateLimiter

logger = logging.getLogger(__name__)

CHAT_ROLES = ("user", "assistant")


def trim_history(messages: list[dict[str, str]], window: int = 10) -> list[dict[str, str]]:
    """Keep the last ``window`` user/assistant turns, starting on a user turn.

    System messages are dropped; the system prompt travels separately.
    """
    turns = [
        {"role": m["role"], "content": m["content"]}
        for m in messages
        if m.get("role") in CHAT_ROLES and m.get("content")
    ][-window:]
    while turns and turns[0]["role"] != "user":
        turns.pop(0)
    return turns


class LLMClient:
    """Issues chat completions through a shared :class:`RateLimiter`."""

    def __init__(
        self,
        api_key: str,
        model: str,
        rate_limiter: RateLimiter,
        max_tokens: int = 2000,
        temperature: float = 0.7,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.rate_limiter = rate_limiter
        self.max_tokens = max_tokens
        self.temperature = temperature

    @classmethod
    def from_settings(cls, settings: Settings, rate_limiter: RateLimiter) -> LLMClient:
        return cls(
            api_key=settings.anthropic_api_key,
            model=settings.llm_model,
            rate_limiter=rate_limiter,
            max_tokens=settings.llm_max_tokens,
            temperature=settings.llm_temperature,
        )

    def _create(self, **kwargs: Any) -> Any:
        self.rate_limiter.acquire()
        client = Anthropic(api_key=self.api_key)
        try:
            return client.messages.create(model=self.model, **kwargs)
        except APIError as exc:
            logger.exception("LLM call failed")
            raise UpstreamError("LLM request failed", details=str(exc)) from exc

    def complete(
        self,
        system: str,
        messages: list[dict[str, str]],
        *,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        """Return the plain-text reply to ``messages``."""
        response = self._create(
            max_tokens=max_tokens or self.max_tokens,
            temperature=self.temperature if temperature is None else temperature,
            system=system,
            messages=messages,
        )
        texts = [block.text for block in response.content if isinstance(block, TextBlock)]
        if not texts:
            raise UpstreamError("LLM returned no text content")
        return "".join(texts)

    def call_tool(
        self,
        system: str,
        messages: list[dict[str, str]],
        tool: dict[str, Any],
        *,
        temperature: float = 0.2,
    ) -> dict[str, Any]:
        """Force a single tool call and return its parsed input."""
        response = self._create(
            max_tokens=self.max_tokens,
            temperature=temperature,
            system=system,
            tools=[tool],
            tool_choice={"type": "tool", "name": tool["name"]},
            messages=messages,
        )
        for block in response.content:
            if block.type != "tool_use" or block.name != tool["name"]:
                continue
            data = block.input
            if isinstance(data, str):
                data = json.loads(data)
            return data  # type: ignore[no-any-return]
        raise UpstreamError(f"LLM did not call {tool['name']}")
