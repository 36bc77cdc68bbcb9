"""Supabase client factory and small row helpers shared by the storage modules."""

from __future__ import annotations

from typing import Any, cast

from supabase import Client, create_client

from bizcoach.config import settings


def get_supabase_client() -> Client:
    """Create and return a Supabase client from settings."""
    return create_client(settings.supabase_url, settings.supabase_key)


def rows(result: Any) -> list[dict[str, Any]]:
    """Narrow a PostgREST response's ``.data`` to a list of row dicts."""
    return cast(list[dict[str, Any]], result.data or [])


def fetch_by_id(client: Client, table: str, row_id: str) -> dict[str, Any] | None:
    """Return the row with ``id == row_id`` or None."""
    found = rows(client.table(table).select("*").eq("id", row_id).execute())
    return found[0] if found else None
