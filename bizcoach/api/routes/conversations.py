"""Conversation and message persistence endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter

from bizcoach.api.models import ConversationCreate, ConversationUpdate
from bizcoach.errors import NotFoundError
from bizcoach.storage.client import get_supabase_client
from bizcoach.storage.conversations import (
    create_conversation,
    get_conversation,
    list_conversations,
    replace_messages,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/api/conversations")
async def list_all() -> list[dict[str, Any]]:
    return list_conversations(get_supabase_client())


@router.post("/api/conversations", status_code=201)
async def create(request: ConversationCreate) -> dict[str, Any]:
    conversation = create_conversation(
        get_supabase_client(),
        title=request.title,
        messages=[m.model_dump() for m in request.messages],
        thread_id=request.thread_id,
    )
    logger.info(
        "Created conversation %s with %d messages",
        conversation["id"],
        len(conversation["messages"]),
    )
    return conversation


@router.get("/api/conversations/{conversation_id}")
async def get_one(conversation_id: str) -> dict[str, Any]:
    conversation = get_conversation(get_supabase_client(), conversation_id)
    if conversation is None:
        raise NotFoundError("Conversation not found")
    return conversation


@router.put("/api/conversations/{conversation_id}")
async def update(conversation_id: str, request: ConversationUpdate) -> dict[str, Any]:
    """Replace every stored message of the conversation with the request's list."""
    client = get_supabase_client()
    if get_conversation(client, conversation_id) is None:
        raise NotFoundError("Conversation not found")
    return replace_messages(client, conversation_id, [m.model_dump() for m in request.messages])
