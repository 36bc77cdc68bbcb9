"""Data models for action-item extraction."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ChatMessage:
    """A single chat message tagged with its speaker role."""

    role: str  # "user", "assistant", "system"
    content: str


@dataclass
class PreparedActionItem:
    """An extracted action item ready to be inserted into ``action_items``."""

    content: str
    ordinal: int
    message_id: str | None = None
    conversation_id: str | None = None


@dataclass
class HierarchyNode:
    """An action item placed in a parent/child hierarchy."""

    content: str
    parent_index: int | None = None  # index of the parent node, None for roots
