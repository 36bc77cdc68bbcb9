"""Delete a row together with every descendant reachable through ``parent_id``."""

from __future__ import annotations

import logging

from supabase import Client

from bizcoach.errors import HasChildrenError, NotFoundError
from bizcoach.storage.client import fetch_by_id, rows

logger = logging.getLogger(__name__)


def child_ids(client: Client, table: str, parent_ids: list[str]) -> list[str]:
    """Ids of the direct children of any of ``parent_ids``."""
    if not parent_ids:
        return []
    result = client.table(table).select("id").in_("parent_id", parent_ids).execute()
    return [r["id"] for r in rows(result)]


def collect_descendant_ids(client: Client, table: str, root_id: str) -> list[str]:
    """Breadth-first walk below ``root_id``, one query per tree level.

    The root itself is not included.  Ids already seen are skipped, so a
    corrupted parent cycle cannot loop forever.
    """
    seen: set[str] = {root_id}
    descendants: list[str] = []
    frontier = [root_id]
    while frontier:
        level = [cid for cid in child_ids(client, table, frontier) if cid not in seen]
        seen.update(level)
        descendants.extend(level)
        frontier = level
    return descendants


def delete_tree(
    client: Client,
    table: str,
    node_id: str,
    delete_children: bool,
    label: str = "Item",
) -> int:
    """Delete ``node_id`` and, when asked, its whole subtree.

    The full id set is computed up front and removed with one bulk delete,
    so a storage failure cannot leave half a tree behind.

    Args:
        client: Supabase client.
        table: Table holding the self-referencing ``parent_id`` column.
        node_id: Root of the subtree to delete.
        delete_children: Cascade to descendants instead of refusing.
        label: Human-readable row name used in error messages.

    Returns:
        Number of rows deleted.

    Raises:
        NotFoundError: ``node_id`` does not exist.
        HasChildrenError: The node has children and ``delete_children`` is False.
    """
    if fetch_by_id(client, table, node_id) is None:
        raise NotFoundError(f"{label} not found")

    if not delete_children:
        if child_ids(client, table, [node_id]):
            raise HasChildrenError(
                f"Cannot delete {label.lower()} with children. "
                "Use deleteChildren=true to delete all."
            )
        client.table(table).delete().eq("id", node_id).execute()
        return 1

    ids = [node_id, *collect_descendant_ids(client, table, node_id)]
    client.table(table).delete().in_("id", ids).execute()
    logger.info("Deleted %d rows from %s under %s", len(ids), table, node_id)
    return len(ids)
