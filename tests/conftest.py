"""
Footy Arena - Test Configuration and Fixtures

An in-memory stand-in for the Supabase table API so the managers and the
room controller can be exercised with their real query chains.
"""

from __future__ import annotations

import copy
import uuid
from datetime import datetime, timezone
from typing import Any
from unittest.mock import MagicMock

import pytest
from postgrest.exceptions import APIError

from footy_arena.auth.session import SessionContext
from footy_arena.config.settings import Settings


# =============================================================================
# FAKE SUPABASE
# =============================================================================

def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


_DEFAULTS: dict[str, dict[str, Any]] = {
    "profiles": {"avatar_color": "#22c55e"},
    "rooms": {
        "status": "waiting",
        "is_locked": False,
        "visibility": "private",
        "settings": {},
    },
    "room_players": {"join_order": 0, "status": "connected", "score": 0},
}

_TIMESTAMP_COLUMN = {
    "profiles": "created_at",
    "rooms": "created_at",
    "room_players": "joined_at",
}

_UNIQUE: dict[str, tuple[tuple[str, ...], ...]] = {
    "profiles": (("username",),),
    "room_players": (("room_id", "player_id"),),
}


class FakeResponse:
    def __init__(self, data: list[dict], count: int | None = None) -> None:
        self.data = data
        self.count = count


class FakeQuery:
    """One chained request: select/insert/update/upsert/delete + filters."""

    def __init__(self, db: "FakeSupabase", table: str, op: str, payload: Any = None, **opts) -> None:
        self.db = db
        self.table = table
        self.op = op
        self.payload = payload
        self.opts = opts
        self.filters: list = []
        self.order_by: str | None = None
        self.desc = False
        self.limit_n: int | None = None

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append(lambda row: str(row.get(column)) == str(value))
        return self

    def in_(self, column: str, values: list) -> "FakeQuery":
        wanted = {str(v) for v in values}
        self.filters.append(lambda row: str(row.get(column)) in wanted)
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.order_by = column
        self.desc = desc
        return self

    def limit(self, n: int) -> "FakeQuery":
        self.limit_n = n
        return self

    def _matches(self) -> list[dict]:
        rows = self.db.tables[self.table]
        return [r for r in rows if all(f(r) for f in self.filters)]

    def execute(self) -> FakeResponse:
        self.db.calls.append((self.table, self.op))
        failure = self.db.failures.pop((self.table, self.op), None)
        if failure is not None:
            raise failure
        return getattr(self, f"_exec_{self.op}")()

    def _exec_select(self) -> FakeResponse:
        rows = self._matches()
        if self.order_by:
            rows = sorted(rows, key=lambda r: r.get(self.order_by), reverse=self.desc)
        if self.limit_n is not None:
            rows = rows[: self.limit_n]
        count = len(rows) if self.opts.get("count") == "exact" else None
        return FakeResponse(copy.deepcopy(rows), count)

    def _exec_insert(self) -> FakeResponse:
        row = self.db.new_row(self.table, self.payload)
        self.db.check_unique(self.table, row)
        self.db.tables[self.table].append(row)
        return FakeResponse([copy.deepcopy(row)])

    def _exec_update(self) -> FakeResponse:
        rows = self._matches()
        for row in rows:
            row.update(copy.deepcopy(self.payload))
        return FakeResponse(copy.deepcopy(rows))

    def _exec_upsert(self) -> FakeResponse:
        keys = [k.strip() for k in self.opts.get("on_conflict", "id").split(",")]
        for row in self.db.tables[self.table]:
            if all(str(row.get(k)) == str(self.payload.get(k)) for k in keys):
                row.update(copy.deepcopy(self.payload))
                return FakeResponse([copy.deepcopy(row)])
        return self._exec_insert()

    def _exec_delete(self) -> FakeResponse:
        doomed = self._matches()
        self.db.tables[self.table] = [
            r for r in self.db.tables[self.table] if r not in doomed
        ]
        return FakeResponse(copy.deepcopy(doomed))


class FakeTable:
    def __init__(self, db: "FakeSupabase", name: str) -> None:
        self.db = db
        self.name = name

    def select(self, columns: str = "*", count: str | None = None) -> FakeQuery:
        return FakeQuery(self.db, self.name, "select", count=count)

    def insert(self, row: dict) -> FakeQuery:
        return FakeQuery(self.db, self.name, "insert", row)

    def update(self, fields: dict) -> FakeQuery:
        return FakeQuery(self.db, self.name, "update", fields)

    def upsert(self, row: dict, on_conflict: str = "id") -> FakeQuery:
        return FakeQuery(self.db, self.name, "upsert", row, on_conflict=on_conflict)

    def delete(self) -> FakeQuery:
        return FakeQuery(self.db, self.name, "delete")


class FakeSupabase:
    """Just enough of ``supabase.Client`` for the database managers."""

    def __init__(self) -> None:
        self.tables: dict[str, list[dict]] = {
            "profiles": [],
            "rooms": [],
            "room_players": [],
        }
        self.failures: dict[tuple[str, str], Exception] = {}
        self.calls: list[tuple[str, str]] = []
        self.auth = MagicMock()
        self.realtime = MagicMock()

    def table(self, name: str) -> FakeTable:
        return FakeTable(self, name)

    def fail_next(self, table: str, op: str, message: str = "boom", code: str = "XX000") -> None:
        """Make the next ``op`` on ``table`` raise a PostgREST APIError."""
        self.failures[(table, op)] = APIError({"message": message, "code": code})

    def new_row(self, table: str, payload: dict) -> dict:
        row = copy.deepcopy(_DEFAULTS.get(table, {}))
        row["id"] = str(uuid.uuid4())
        row[_TIMESTAMP_COLUMN[table]] = _now()
        row.update(copy.deepcopy(payload))
        return row

    def check_unique(self, table: str, row: dict) -> None:
        for cols in _UNIQUE.get(table, ()):
            for existing in self.tables[table]:
                if all(existing.get(c) == row.get(c) for c in cols):
                    raise APIError({
                        "message": "duplicate key value violates unique constraint",
                        "code": "23505",
                    })

    # -- seeding helpers -------------------------------------------------

    def add_profile(self, username: str) -> str:
        row = self.new_row("profiles", {"username": username})
        self.tables["profiles"].append(row)
        return row["id"]


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def fake_db() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_anon_key="anon-key",
    )


@pytest.fixture
def make_session(fake_db):
    """Factory creating a profile row and a SessionContext for it."""
    def _make(username: str) -> SessionContext:
        user_id = fake_db.add_profile(username)
        return SessionContext(user_id=user_id, username=username)
    return _make


@pytest.fixture
def host(make_session) -> SessionContext:
    return make_session("host_player")


@pytest.fixture
def guests(make_session) -> list[SessionContext]:
    return [make_session(f"guest_{i}") for i in range(1, 5)]
