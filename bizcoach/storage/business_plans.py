"""Supabase storage helpers for business plans and their content sections."""

from __future__ import annotations

from datetime import date
from typing import Any

from supabase import Client

from bizcoach.storage.client import fetch_by_id, rows

TABLE = "business_plans"

SUMMARY_COLUMNS = "id, title, status, created_at, updated_at"


def list_business_plans(client: Client) -> list[dict[str, Any]]:
    result = client.table(TABLE).select(SUMMARY_COLUMNS).order("created_at", desc=True).execute()
    return rows(result)


def get_business_plan(client: Client, plan_id: str) -> dict[str, Any] | None:
    return fetch_by_id(client, TABLE, plan_id)


def create_business_plan(
    client: Client, title: str, description: str | None = None
) -> dict[str, Any]:
    """Create a draft plan whose content starts with a cover page."""
    content = {"coverPage": {"businessName": title, "date": date.today().isoformat()}}
    result = (
        client.table(TABLE)
        .insert({"title": title, "description": description, "status": "draft", "content": content})
        .execute()
    )
    return rows(result)[0]


def update_business_plan(client: Client, plan_id: str, changes: dict[str, Any]) -> dict[str, Any]:
    result = client.table(TABLE).update(changes).eq("id", plan_id).execute()
    return rows(result)[0]


def delete_business_plan(client: Client, plan_id: str) -> bool:
    """Delete a plan; returns False when nothing matched."""
    result = client.table(TABLE).delete().eq("id", plan_id).execute()
    return bool(rows(result))


def plan_content(plan: dict[str, Any]) -> dict[str, Any]:
    """The plan's content document, tolerating a null column."""
    return dict(plan.get("content") or {})


def merge_section(
    client: Client, plan: dict[str, Any], section: str, data: dict[str, Any]
) -> dict[str, Any]:
    """Shallow-merge ``data`` into one content section and persist the plan.

    Returns:
        The updated section.
    """
    content = plan_content(plan)
    content[section] = {**(content.get(section) or {}), **data}
    update_business_plan(client, plan["id"], {"content": content})
    return content[section]  # type: ignore[no-any-return]
