"""LLM-backed helpers: action list extraction and bullet-point summaries."""

from __future__ import annotations

import logging
import uuid
from typing import Any

from fastapi import APIRouter, Depends

from bizcoach.api.deps import get_llm_client
from bizcoach.api.models import (
    ExtractActionListsRequest,
    ExtractActionListsResponse,
    ExtractedList,
    SummarizeRequest,
    SummarizeResponse,
)
from bizcoach.errors import InvalidRequestError
from bizcoach.llm.client import LLMClient
from bizcoach.llm.prompts import (
    ACTION_LISTS_SYSTEM_PROMPT,
    ACTION_LISTS_TOOL,
    SUMMARY_PROMPT,
    SUMMARY_SYSTEM_PROMPT,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def remap_list_ids(raw_lists: list[dict[str, Any]]) -> list[ExtractedList]:
    """Give every list a fresh UUID and rewrite parent links to match.

    Lists without a title or without items are dropped; links to a dropped
    or unknown parent become top-level.
    """
    kept = [
        entry
        for entry in raw_lists
        if str(entry.get("title") or "").strip() and entry.get("items")
    ]
    fresh = [str(uuid.uuid4()) for _ in kept]
    new_ids: dict[str, str] = {}
    for entry, new_id in zip(kept, fresh):
        new_ids.setdefault(str(entry.get("id")), new_id)

    result = []
    for entry, new_id in zip(kept, fresh):
        parent = entry.get("parent_id")
        result.append(
            ExtractedList(
                id=new_id,
                title=str(entry["title"]).strip(),
                items=[str(item).strip() for item in entry["items"] if str(item).strip()],
                parent_id=new_ids.get(str(parent)) if parent else None,
            )
        )
    return result


@router.post("/api/ai/extract-action-lists", response_model=ExtractActionListsResponse)
def extract_action_lists(
    request: ExtractActionListsRequest,
    llm: LLMClient = Depends(get_llm_client),
) -> ExtractActionListsResponse:
    """Ask the LLM to organise ``content`` into titled, optionally nested action lists."""
    if not request.content.strip():
        raise InvalidRequestError("Content is required")

    data = llm.call_tool(
        ACTION_LISTS_SYSTEM_PROMPT,
        [{"role": "user", "content": request.content}],
        ACTION_LISTS_TOOL,
    )
    lists = remap_list_ids(data.get("action_lists") or [])
    logger.info("Extracted %d action lists", len(lists))
    return ExtractActionListsResponse(action_lists=lists)


DEFAULT_SUMMARY_LENGTH = 500
MAX_SUMMARY_LENGTH = 2000
CHARS_PER_TOKEN = 4


@router.post("/api/ai/summarize", response_model=SummarizeResponse)
def summarize(
    request: SummarizeRequest,
    llm: LLMClient = Depends(get_llm_client),
) -> SummarizeResponse:
    """Condense ``content`` into a handful of "• " bullet points."""
    if not request.content or not request.content.strip():
        raise InvalidRequestError("Content is required")

    max_length = min(request.max_length or DEFAULT_SUMMARY_LENGTH, MAX_SUMMARY_LENGTH)
    summary = llm.complete(
        SUMMARY_SYSTEM_PROMPT,
        [{"role": "user", "content": SUMMARY_PROMPT.format(content=request.content)}],
        max_tokens=max(max_length // CHARS_PER_TOKEN, 1),
        temperature=0.5,
    )
    return SummarizeResponse(summary=summary.strip())
