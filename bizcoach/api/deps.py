"""FastAPI dependencies shared by the route modules."""

from __future__ import annotations

from fastapi import Request

from bizcoach.config import settings
from bizcoach.llm.client import LLMClient


def get_llm_client(request: Request) -> LLMClient:
    """An LLM client bound to the app-wide rate limiter."""
    return LLMClient.from_settings(settings, request.app.state.rate_limiter)
