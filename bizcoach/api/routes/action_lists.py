"""Action item list endpoints."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Query

from bizcoach.api.models import ActionListCreate, ActionListUpdate, DeleteResponse
from bizcoach.errors import InvalidRequestError, NotFoundError
from bizcoach.storage.action_lists import (
    create_action_list,
    delete_action_list,
    get_action_list,
    list_action_lists,
    update_action_list,
)
from bizcoach.storage.client import get_supabase_client

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/api/action-item-lists")
async def list_lists() -> list[dict[str, Any]]:
    return list_action_lists(get_supabase_client())


@router.post("/api/action-item-lists", status_code=201)
async def create_list(request: ActionListCreate) -> dict[str, Any]:
    if not request.title or not request.title.strip():
        raise InvalidRequestError("Title is required")

    created = create_action_list(
        get_supabase_client(),
        title=request.title.strip(),
        items=request.items,
        color=request.color,
        topic_id=request.topic_id,
        parent_id=request.parent_id,
        ordinal=request.ordinal,
    )
    logger.info("Created action item list %s", created["id"])
    return created


@router.get("/api/action-item-lists/{list_id}")
async def get_list(list_id: str) -> dict[str, Any]:
    found = get_action_list(get_supabase_client(), list_id)
    if found is None:
        raise NotFoundError("Action item list not found")
    return found


@router.patch("/api/action-item-lists/{list_id}")
async def update_list(list_id: str, changes: ActionListUpdate) -> dict[str, Any]:
    client = get_supabase_client()
    existing = get_action_list(client, list_id)
    if existing is None:
        raise NotFoundError("Action item list not found")

    fields = changes.model_dump(exclude_unset=True)
    if not fields:
        return existing
    return update_action_list(client, list_id, fields)


@router.delete("/api/action-item-lists/{list_id}", response_model=DeleteResponse)
async def delete_list(
    list_id: str,
    delete_children: Annotated[bool, Query(alias="deleteChildren")] = False,
) -> DeleteResponse:
    delete_action_list(get_supabase_client(), list_id, delete_children)
    return DeleteResponse()
