"""Shared fixtures: an in-memory stand-in for the Supabase table API."""

from __future__ import annotations

import copy
import itertools
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import MagicMock

import pytest

from bizcoach.llm.client import LLMClient
from bizcoach.llm.rate_limit import RateLimiter

_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


@dataclass
class FakeResult:
    data: list[dict[str, Any]]


class FakeQuery:
    """Chainable query builder mirroring the subset of postgrest used by the app."""

    def __init__(self, db: FakeSupabase, table: str) -> None:
        self.db = db
        self.table = table
        self.op = "select"
        self.columns = "*"
        self.payload: Any = None
        self.filters: list[tuple[str, str, Any]] = []
        self.ordering: tuple[str, bool] | None = None

    def select(self, columns: str = "*") -> FakeQuery:
        self.op = "select"
        self.columns = columns
        return self

    def insert(self, payload: dict[str, Any] | list[dict[str, Any]]) -> FakeQuery:
        self.op = "insert"
        self.payload = payload
        return self

    def update(self, payload: dict[str, Any]) -> FakeQuery:
        self.op = "update"
        self.payload = payload
        return self

    def delete(self) -> FakeQuery:
        self.op = "delete"
        return self

    def eq(self, column: str, value: Any) -> FakeQuery:
        self.filters.append(("eq", column, value))
        return self

    def in_(self, column: str, values: list[Any]) -> FakeQuery:
        self.filters.append(("in", column, list(values)))
        return self

    def is_(self, column: str, value: str) -> FakeQuery:
        self.filters.append(("is", column, None if value == "null" else value))
        return self

    def order(self, column: str, desc: bool = False) -> FakeQuery:
        self.ordering = (column, desc)
        return self

    def _matches(self, row: dict[str, Any]) -> bool:
        for kind, column, value in self.filters:
            current = row.get(column)
            if kind == "eq" and current != value:
                return False
            if kind == "in" and current not in value:
                return False
            if kind == "is" and current is not value:
                return False
        return True

    def _project(self, row: dict[str, Any]) -> dict[str, Any]:
        if self.columns.strip() == "*":
            return copy.deepcopy(row)
        wanted = [c.strip() for c in self.columns.split(",")]
        return {c: copy.deepcopy(row.get(c)) for c in wanted}

    def execute(self) -> FakeResult:
        self.db.calls.append((self.table, self.op, list(self.filters)))
        if self.op in self.db.fail_ops:
            raise RuntimeError(f"{self.op} on {self.table} failed")

        table = self.db.tables.setdefault(self.table, [])
        if self.op == "insert":
            payload = self.payload if isinstance(self.payload, list) else [self.payload]
            created = [self.db.new_row(self.table, data) for data in payload]
            table.extend(created)
            return FakeResult([copy.deepcopy(r) for r in created])

        matched = [row for row in table if self._matches(row)]
        if self.op == "update":
            for row in matched:
                row.update(copy.deepcopy(self.payload))
            return FakeResult([copy.deepcopy(r) for r in matched])
        if self.op == "delete":
            self.db.tables[self.table] = [row for row in table if row not in matched]
            return FakeResult([copy.deepcopy(r) for r in matched])

        if self.ordering:
            column, desc = self.ordering
            matched = sorted(
                matched,
                key=lambda r: (r.get(column) is None, r.get(column) or 0),
                reverse=desc,
            )
        return FakeResult([self._project(r) for r in matched])


class FakeSupabase:
    """Dict-of-lists database with id and timestamp defaults."""

    DEFAULTS: dict[str, dict[str, Any]] = {
        "action_items": {"is_completed": False, "ordinal": 0, "parent_id": None},
        "action_item_lists": {"color": "light-blue", "ordinal": 0, "parent_id": None},
        "business_plans": {"status": "draft", "content": {}},
        "business_notes": {"category": "note"},
    }

    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.calls: list[tuple[str, str, list[tuple[str, str, Any]]]] = []
        self.fail_ops: set[str] = set()
        self._tick = itertools.count()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def new_row(self, table: str, data: dict[str, Any]) -> dict[str, Any]:
        stamp = (_EPOCH + timedelta(seconds=next(self._tick))).isoformat()
        row = {"id": str(uuid.uuid4()), "created_at": stamp, "updated_at": stamp}
        row.update(copy.deepcopy(self.DEFAULTS.get(table, {})))
        row.update(copy.deepcopy(data))
        return row

    def seed(self, table: str, **data: Any) -> dict[str, Any]:
        row = self.new_row(table, data)
        self.tables.setdefault(table, []).append(row)
        return row

    def rows(self, table: str) -> list[dict[str, Any]]:
        return self.tables.get(table, [])

    def ops(self, table: str, op: str) -> list[list[tuple[str, str, Any]]]:
        return [filters for t, o, filters in self.calls if t == table and o == op]


ROUTE_MODULES = (
    "action_items",
    "action_lists",
    "business_plans",
    "conversations",
    "notes",
)


@pytest.fixture
def db() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def patched_db(db: FakeSupabase, monkeypatch: pytest.MonkeyPatch) -> FakeSupabase:
    """Route every ``get_supabase_client()`` call in the API to ``db``."""
    for module in ROUTE_MODULES:
        monkeypatch.setattr(f"bizcoach.api.routes.{module}.get_supabase_client", lambda: db)
    return db


@pytest.fixture
def llm() -> MagicMock:
    """An ``LLMClient`` double; set ``complete``/``call_tool`` return values per test."""
    mock = MagicMock(spec=LLMClient)
    mock.model = "claude-test"
    return mock


@pytest.fixture
def api_client(patched_db: FakeSupabase, llm: MagicMock):
    from fastapi.testclient import TestClient

    from bizcoach.api.deps import get_llm_client
    from bizcoach.api.main import app

    app.dependency_overrides[get_llm_client] = lambda: llm
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def no_wait_limiter() -> RateLimiter:
    return RateLimiter(0)
