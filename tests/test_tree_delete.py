"""Tests for subtree collection and deletion over a self-referencing table."""

from __future__ import annotations

import pytest

from bizcoach.errors import HasChildrenError, NotFoundError
from bizcoach.storage.tree import collect_descendant_ids, delete_tree

TABLE = "action_items"


@pytest.fixture
def tree(db):
    """root -> (a -> a1, b); plus an unrelated row."""
    root = db.seed(TABLE, content="Launch the shop")
    a = db.seed(TABLE, content="Find a location", parent_id=root["id"])
    a1 = db.seed(TABLE, content="Visit three sites", parent_id=a["id"])
    b = db.seed(TABLE, content="Order stock", parent_id=root["id"])
    other = db.seed(TABLE, content="Unrelated task")
    return {"root": root, "a": a, "a1": a1, "b": b, "other": other}


def test_collect_descendants_breadth_first(db, tree) -> None:
    ids = collect_descendant_ids(db, TABLE, tree["root"]["id"])
    assert ids == [tree["a"]["id"], tree["b"]["id"], tree["a1"]["id"]]


def test_collect_descendants_one_query_per_level(db, tree) -> None:
    collect_descendant_ids(db, TABLE, tree["root"]["id"])
    # children of root, children of (a, b), children of a1
    assert len(db.ops(TABLE, "select")) == 3


def test_collect_descendants_survives_cycle(db) -> None:
    a = db.seed(TABLE, content="Node a")
    b = db.seed(TABLE, content="Node b", parent_id=a["id"])
    a["parent_id"] = b["id"]
    assert collect_descendant_ids(db, TABLE, a["id"]) == [b["id"]]


def test_missing_node(db) -> None:
    with pytest.raises(NotFoundError, match="Action item not found"):
        delete_tree(db, TABLE, "missing", True, label="Action item")


def test_refuses_when_children_and_no_cascade(db, tree) -> None:
    with pytest.raises(HasChildrenError) as exc_info:
        delete_tree(db, TABLE, tree["root"]["id"], False, label="Action item")

    assert exc_info.value.status_code == 400
    assert "deleteChildren=true" in exc_info.value.error
    assert len(db.rows(TABLE)) == 5
    assert db.ops(TABLE, "delete") == []


def test_cascade_removes_whole_subtree_in_one_statement(db, tree) -> None:
    deleted = delete_tree(db, TABLE, tree["root"]["id"], True)

    assert deleted == 4
    assert [r["id"] for r in db.rows(TABLE)] == [tree["other"]["id"]]
    deletes = db.ops(TABLE, "delete")
    assert len(deletes) == 1
    kind, column, ids = deletes[0][0]
    assert (kind, column) == ("in", "id")
    assert set(ids) == {tree[k]["id"] for k in ("root", "a", "a1", "b")}


def test_leaf_deleted_without_flag(db, tree) -> None:
    assert delete_tree(db, TABLE, tree["a1"]["id"], False) == 1
    assert tree["a1"]["id"] not in [r["id"] for r in db.rows(TABLE)]
    assert len(db.rows(TABLE)) == 4


def test_leaf_deleted_with_flag(db, tree) -> None:
    assert delete_tree(db, TABLE, tree["b"]["id"], True) == 1
    assert len(db.rows(TABLE)) == 4


def test_storage_failure_leaves_tree_intact(db, tree) -> None:
    db.fail_ops.add("delete")
    with pytest.raises(RuntimeError):
        delete_tree(db, TABLE, tree["root"]["id"], True)
    assert len(db.rows(TABLE)) == 5
