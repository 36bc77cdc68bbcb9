"""Supabase storage helpers for conversations and their messages."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from supabase import Client

from bizcoach.storage.client import fetch_by_id, rows


def _messages(client: Client, conversation_id: str) -> list[dict[str, Any]]:
    result = (
        client.table("messages")
        .select("*")
        .eq("conversation_id", conversation_id)
        .order("created_at")
        .execute()
    )
    return rows(result)


def _insert_messages(
    client: Client, conversation_id: str, messages: list[dict[str, str]]
) -> list[dict[str, Any]]:
    if not messages:
        return []
    payload = [
        {"conversation_id": conversation_id, "role": m["role"], "content": m["content"]}
        for m in messages
    ]
    return rows(client.table("messages").insert(payload).execute())


def list_conversations(client: Client) -> list[dict[str, Any]]:
    """All conversations, most recently updated first, with their messages."""
    result = client.table("conversations").select("*").order("updated_at", desc=True).execute()
    return [{**c, "messages": _messages(client, c["id"])} for c in rows(result)]


def get_conversation(client: Client, conversation_id: str) -> dict[str, Any] | None:
    conversation = fetch_by_id(client, "conversations", conversation_id)
    if conversation is None:
        return None
    return {**conversation, "messages": _messages(client, conversation_id)}


def get_message(client: Client, message_id: str) -> dict[str, Any] | None:
    return fetch_by_id(client, "messages", message_id)


def create_conversation(
    client: Client,
    title: str,
    messages: list[dict[str, str]],
    thread_id: str | None = None,
) -> dict[str, Any]:
    result = client.table("conversations").insert({"title": title, "thread_id": thread_id}).execute()
    conversation = rows(result)[0]
    return {**conversation, "messages": _insert_messages(client, conversation["id"], messages)}


def replace_messages(
    client: Client, conversation_id: str, messages: list[dict[str, str]]
) -> dict[str, Any]:
    """Swap the stored messages of a conversation for ``messages``."""
    client.table("messages").delete().eq("conversation_id", conversation_id).execute()
    _insert_messages(client, conversation_id, messages)
    result = (
        client.table("conversations")
        .update({"updated_at": datetime.now(timezone.utc).isoformat()})
        .eq("id", conversation_id)
        .execute()
    )
    return {**rows(result)[0], "messages": _messages(client, conversation_id)}
