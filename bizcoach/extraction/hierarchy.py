"""Turn extracted candidates into persistence-ready action item records."""

from __future__ import annotations

from bizcoach.extraction.models import HierarchyNode, PreparedActionItem


def prepare_action_items(
    items: list[str],
    message_id: str | None,
    conversation_id: str | None,
) -> list[PreparedActionItem]:
    """Assign sequential ordinals (from 0) and owning message/conversation ids."""
    return [
        PreparedActionItem(
            content=content,
            ordinal=index,
            message_id=message_id,
            conversation_id=conversation_id,
        )
        for index, content in enumerate(items)
    ]


def organize_action_items_hierarchy(items: list[str]) -> list[HierarchyNode]:
    """Place items in a parent/child hierarchy.

    Every item is currently a root: no grouping rule (indentation, sub-lists)
    has been agreed on, so the input order is returned as a flat list.
    """
    return [HierarchyNode(content=content) for content in items]
