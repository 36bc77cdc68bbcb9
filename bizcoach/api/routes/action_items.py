"""Action item endpoints: CRUD, tree deletion and extraction from chat text."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from bizcoach.api.models import (
    ActionItemCreate,
    ActionItemUpdate,
    BatchCreateResponse,
    BulkCreateRequest,
    CreatedItemSummary,
    CreatedItemsResponse,
    DeleteResponse,
    ExtractFromMessageRequest,
)
from bizcoach.errors import InvalidRequestError, NotFoundError
from bizcoach.extraction.extractor import extract_action_items, extract_action_items_from_text
from bizcoach.extraction.hierarchy import prepare_action_items
from bizcoach.extraction.models import ChatMessage
from bizcoach.storage.action_items import (
    TABLE,
    create_action_item,
    create_action_items,
    delete_action_item,
    get_action_item,
    list_action_items,
    list_children,
    store_prepared_items,
    update_action_item,
)
from bizcoach.storage.client import fetch_by_id, get_supabase_client
from bizcoach.storage.conversations import get_message

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/api/action-items")
async def list_items(
    conversation_id: str | None = None,
    message_id: str | None = None,
    parent_id: str | None = None,
    root_items_only: bool = False,
) -> list[dict[str, Any]]:
    """List action items ordered by ordinal.

    ``root_items_only`` wins over ``parent_id`` when both are given.
    """
    client = get_supabase_client()
    return list_action_items(
        client,
        conversation_id=conversation_id,
        message_id=message_id,
        parent_id=parent_id,
        root_items_only=root_items_only,
    )


@router.post("/api/action-items", status_code=201, response_model=None)
async def create_items(
    body: ActionItemCreate | list[ActionItemCreate],
) -> dict[str, Any] | JSONResponse:
    """Create one action item, or several when the body is an array.

    Batch items without an ordinal take their array index.
    """
    client = get_supabase_client()

    if isinstance(body, list):
        if not body:
            raise InvalidRequestError("No items provided")
        if any(not item.content for item in body):
            raise InvalidRequestError("Content is required")
        payload = []
        for index, item in enumerate(body):
            row = item.model_dump()
            row["ordinal"] = item.ordinal if item.ordinal is not None else index
            payload.append(row)
        created = create_action_items(client, payload)
        logger.info("Created %d action items", len(created))
        return JSONResponse(
            status_code=201,
            content=BatchCreateResponse(count=len(created)).model_dump(),
        )

    if not body.content:
        raise InvalidRequestError("Content is required")
    row = body.model_dump()
    row["ordinal"] = body.ordinal if body.ordinal is not None else 0
    return create_action_item(client, row)


@router.post("/api/action-items/bulk-create", response_model=CreatedItemsResponse)
async def bulk_create(request: BulkCreateRequest) -> CreatedItemsResponse:
    """Extract action items from free text and store them in order."""
    if not request.content.strip():
        raise InvalidRequestError("Content is required")

    extracted = extract_action_items_from_text(request.content)
    if not extracted:
        return CreatedItemsResponse(count=0, items=[])

    prepared = prepare_action_items(extracted, None, request.conversation_id)
    created = store_prepared_items(get_supabase_client(), prepared)
    logger.info("Bulk-created %d action items", len(created))
    return CreatedItemsResponse(
        count=len(created),
        items=[CreatedItemSummary(id=r["id"], content=r["content"]) for r in created],
    )


@router.post("/api/action-items/extract", response_model=CreatedItemsResponse)
async def extract_from_message(request: ExtractFromMessageRequest) -> CreatedItemsResponse:
    """Extract action items from a stored message and link them to it.

    Only assistant messages yield items.
    """
    client = get_supabase_client()
    message = get_message(client, request.message_id)
    if message is None:
        raise NotFoundError("Message not found")

    extracted = extract_action_items(ChatMessage(role=message["role"], content=message["content"]))
    if not extracted:
        return CreatedItemsResponse(count=0, items=[])

    prepared = prepare_action_items(extracted, message["id"], message.get("conversation_id"))
    created = store_prepared_items(client, prepared)
    logger.info("Extracted %d action items from message %s", len(created), message["id"])
    return CreatedItemsResponse(
        count=len(created),
        items=[CreatedItemSummary(id=r["id"], content=r["content"]) for r in created],
    )


@router.get("/api/action-items/{item_id}")
async def get_item(item_id: str) -> dict[str, Any]:
    item = get_action_item(get_supabase_client(), item_id)
    if item is None:
        raise NotFoundError("Action item not found")
    return item


@router.put("/api/action-items/{item_id}")
async def update_item(item_id: str, changes: ActionItemUpdate) -> dict[str, Any]:
    """Update only the fields present in the request body."""
    client = get_supabase_client()
    existing = get_action_item(client, item_id)
    if existing is None:
        raise NotFoundError("Action item not found")

    fields = changes.model_dump(exclude_unset=True)
    if not fields:
        return existing
    return update_action_item(client, item_id, fields)


@router.delete("/api/action-items/{item_id}", response_model=DeleteResponse)
async def delete_item(
    item_id: str,
    delete_children: Annotated[bool, Query(alias="deleteChildren")] = False,
) -> DeleteResponse:
    """Delete an action item; refuses when it has children unless ``deleteChildren=true``."""
    delete_action_item(get_supabase_client(), item_id, delete_children)
    return DeleteResponse()


@router.get("/api/action-items/{item_id}/children")
async def get_children(item_id: str) -> list[dict[str, Any]]:
    client = get_supabase_client()
    if fetch_by_id(client, TABLE, item_id) is None:
        raise NotFoundError("Parent action item not found")
    return list_children(client, item_id)
