"""Business coach chat endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from bizcoach.api.deps import get_llm_client
from bizcoach.api.models import ChatRequest, ChatResponse, ContentAnalysis, MessageIn
from bizcoach.config import settings
from bizcoach.errors import InvalidRequestError, UpstreamError
from bizcoach.extraction.extractor import extract_action_items, message_contains_action_items
from bizcoach.extraction.models import ChatMessage
from bizcoach.llm.client import LLMClient, trim_history
from bizcoach.llm.prompts import COACH_INSTRUCTIONS, TITLE_PROMPT

logger = logging.getLogger(__name__)
router = APIRouter()

MAX_TITLE_LENGTH = 40


def _fallback_title(message: str) -> str:
    return " ".join(message.split()[:5])


def _shorten(title: str) -> str:
    title = title.strip().strip('"').strip()
    if len(title) > MAX_TITLE_LENGTH:
        return title[: MAX_TITLE_LENGTH - 3] + "..."
    return title


def generate_title(llm: LLMClient, first_message: str) -> str:
    """A short conversation title; falls back to the message's first words."""
    try:
        title = llm.complete(
            "You create short titles for business coaching conversations.",
            [{"role": "user", "content": TITLE_PROMPT.format(message=first_message)}],
            max_tokens=20,
        )
    except UpstreamError:
        logger.warning("Title generation failed, using the first words of the message")
        title = ""
    return _shorten(title or _fallback_title(first_message))


def analyse_reply(reply: str) -> ContentAnalysis:
    message = ChatMessage(role="assistant", content=reply)
    if not message_contains_action_items(message):
        return ContentAnalysis(has_actionable_items=False)

    items = extract_action_items(message)
    return ContentAnalysis(
        has_actionable_items=bool(items),
        action_items_summary=f"{len(items)} action items found" if items else None,
        action_items=items,
    )


# Sync handler: the rate limiter blocks, so this runs in the threadpool.
@router.post("/api/chat", response_model=ChatResponse)
def chat(request: ChatRequest, llm: LLMClient = Depends(get_llm_client)) -> ChatResponse:
    """Reply as the business coach and flag action items in the reply."""
    history = trim_history([m.model_dump() for m in request.messages], settings.history_window)
    if not history:
        raise InvalidRequestError("At least one user message is required")
    reply = llm.complete(COACH_INSTRUCTIONS, history)

    title = None
    if request.is_first_message:
        first_user = next((m.content for m in request.messages if m.role == "user"), "")
        if first_user:
            title = generate_title(llm, first_user)

    return ChatResponse(
        model=llm.model,
        message=MessageIn(role="assistant", content=reply),
        content_analysis=analyse_reply(reply),
        title=title,
    )
