"""Supabase storage helpers for the ``business_notes`` table."""

from __future__ import annotations

from typing import Any

from supabase import Client

from bizcoach.storage.client import fetch_by_id, rows

TABLE = "business_notes"

DEFAULT_CATEGORY = "note"


def list_notes(client: Client, category: str | None = None) -> list[dict[str, Any]]:
    """Notes newest first, optionally limited to one category."""
    query = client.table(TABLE).select("*")
    if category:
        query = query.eq("category", category)
    return rows(query.order("created_at", desc=True).execute())


def get_note(client: Client, note_id: str) -> dict[str, Any] | None:
    return fetch_by_id(client, TABLE, note_id)


def create_note(
    client: Client, title: str, content: str, category: str = DEFAULT_CATEGORY
) -> dict[str, Any]:
    result = (
        client.table(TABLE)
        .insert({"title": title, "content": content, "category": category})
        .execute()
    )
    return rows(result)[0]


def delete_note(client: Client, note_id: str) -> bool:
    """Delete a note; returns False when nothing matched."""
    result = client.table(TABLE).delete().eq("id", note_id).execute()
    return bool(rows(result))
