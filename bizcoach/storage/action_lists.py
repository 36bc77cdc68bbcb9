"""Supabase storage helpers for the ``action_item_lists`` table."""

from __future__ import annotations

from typing import Any

from supabase import Client

from bizcoach.storage.client import fetch_by_id, rows
from bizcoach.storage.tree import delete_tree

TABLE = "action_item_lists"

DEFAULT_COLOR = "light-blue"


def list_action_lists(client: Client) -> list[dict[str, Any]]:
    """All lists, newest first."""
    result = client.table(TABLE).select("*").order("created_at", desc=True).execute()
    return rows(result)


def get_action_list(client: Client, list_id: str) -> dict[str, Any] | None:
    return fetch_by_id(client, TABLE, list_id)


def create_action_list(
    client: Client,
    title: str,
    items: list[str] | None = None,
    color: str | None = None,
    topic_id: str | None = None,
    parent_id: str | None = None,
    ordinal: int = 0,
) -> dict[str, Any]:
    result = (
        client.table(TABLE)
        .insert(
            {
                "title": title,
                "items": items or [],
                "color": color or DEFAULT_COLOR,
                "topic_id": topic_id,
                "parent_id": parent_id,
                "ordinal": ordinal,
            }
        )
        .execute()
    )
    return rows(result)[0]


def update_action_list(client: Client, list_id: str, changes: dict[str, Any]) -> dict[str, Any]:
    result = client.table(TABLE).update(changes).eq("id", list_id).execute()
    return rows(result)[0]


def delete_action_list(client: Client, list_id: str, delete_children: bool = False) -> int:
    return delete_tree(client, TABLE, list_id, delete_children, label="Action item list")
