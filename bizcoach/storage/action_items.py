"""Supabase storage helpers for the ``action_items`` table."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from supabase import Client

from bizcoach.extraction.models import PreparedActionItem
from bizcoach.storage.client import fetch_by_id, rows
from bizcoach.storage.tree import delete_tree

TABLE = "action_items"


def _with_child_counts(client: Client, items: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Attach ``child_count`` to each row using a single parent_id lookup."""
    if not items:
        return items
    ids = [item["id"] for item in items]
    children = rows(client.table(TABLE).select("parent_id").in_("parent_id", ids).execute())
    counts: dict[str, int] = {}
    for child in children:
        counts[child["parent_id"]] = counts.get(child["parent_id"], 0) + 1
    return [{**item, "child_count": counts.get(item["id"], 0)} for item in items]


def list_action_items(
    client: Client,
    conversation_id: str | None = None,
    message_id: str | None = None,
    parent_id: str | None = None,
    root_items_only: bool = False,
) -> list[dict[str, Any]]:
    """List action items ordered by ordinal, with optional filters."""
    query = client.table(TABLE).select("*")
    if conversation_id:
        query = query.eq("conversation_id", conversation_id)
    if message_id:
        query = query.eq("message_id", message_id)
    if root_items_only:
        query = query.is_("parent_id", "null")
    elif parent_id:
        query = query.eq("parent_id", parent_id)
    result = query.order("ordinal").execute()
    return _with_child_counts(client, rows(result))


def get_action_item(client: Client, item_id: str) -> dict[str, Any] | None:
    """Return one action item with its ``children`` and ``child_count``."""
    item = fetch_by_id(client, TABLE, item_id)
    if item is None:
        return None
    children = list_action_items(client, parent_id=item_id)
    return {**item, "children": children, "child_count": len(children)}


def list_children(client: Client, item_id: str) -> list[dict[str, Any]]:
    return list_action_items(client, parent_id=item_id)


def create_action_item(client: Client, data: dict[str, Any]) -> dict[str, Any]:
    result = client.table(TABLE).insert(data).execute()
    return rows(result)[0]


def create_action_items(client: Client, items: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Insert several rows in one statement and return them."""
    if not items:
        return []
    return rows(client.table(TABLE).insert(items).execute())


def store_prepared_items(client: Client, items: list[PreparedActionItem]) -> list[dict[str, Any]]:
    """Insert extractor output produced by ``prepare_action_items``."""
    return create_action_items(client, [asdict(item) for item in items])


def update_action_item(client: Client, item_id: str, changes: dict[str, Any]) -> dict[str, Any]:
    if not changes:
        return fetch_by_id(client, TABLE, item_id) or {}
    result = client.table(TABLE).update(changes).eq("id", item_id).execute()
    return rows(result)[0]


def delete_action_item(client: Client, item_id: str, delete_children: bool = False) -> int:
    return delete_tree(client, TABLE, item_id, delete_children, label="Action item")
