"""Shared test fixtures: an in-memory stand-in for the Supabase client."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import pytest
from postgrest.exceptions import APIError

from app.core.role_cache import RoleCache

_MISSING = object()


class FakeAuthError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FakeResponse:
    def __init__(self, data: Any = None, count: int | None = None) -> None:
        self.data = data
        self.count = count


class FakeQuery:
    """Enough of the postgrest builder for the services under test."""

    def __init__(self, client: FakeSupabase, table: str) -> None:
        self.client = client
        self.table = table
        self.columns = "*"
        self.filters: list[tuple[str, str, Any]] = []
        self.count_mode = None
        self.order_by: tuple[str, bool] | None = None
        self.row_limit: int | None = None
        self.mode = "many"

    def select(self, columns: str = "*", count: str | None = None) -> FakeQuery:
        self.columns = columns
        self.count_mode = count
        return self

    def eq(self, column: str, value: Any) -> FakeQuery:
        self.filters.append(("eq", column, value))
        return self

    def in_(self, column: str, values: list) -> FakeQuery:
        self.filters.append(("in", column, list(values)))
        return self

    def order(self, column: str, desc: bool = False) -> FakeQuery:
        self.order_by = (column, desc)
        return self

    def limit(self, n: int) -> FakeQuery:
        self.row_limit = n
        return self

    def single(self) -> FakeQuery:
        self.mode = "single"
        return self

    def maybe_single(self) -> FakeQuery:
        self.mode = "maybe_single"
        return self

    def _check_columns(self, rows: list[dict]) -> None:
        if not rows:
            return
        wanted = [c.strip() for c in self.columns.split(",") if c.strip() not in ("", "*")]
        wanted += [column for _, column, _ in self.filters]
        for column in wanted:
            if column not in rows[0]:
                raise APIError({
                    "message": f"column {self.table}.{column} does not exist",
                    "code": "42703",
                })

    def execute(self) -> FakeResponse | None:
        self.client.queries.append((self.table, list(self.filters)))
        if self.table in self.client.failing_tables:
            raise self.client.failing_tables[self.table]
        if self.table not in self.client.tables:
            raise APIError({"message": f'relation "{self.table}" does not exist', "code": "42P01"})
        rows = self.client.tables[self.table]
        self._check_columns(rows)

        for op, column, value in self.filters:
            if op == "eq":
                rows = [r for r in rows if r.get(column) == value]
            else:
                rows = [r for r in rows if r.get(column) in value]
        if self.order_by:
            column, desc = self.order_by
            rows = sorted(rows, key=lambda r: str(r.get(column) or ""), reverse=desc)
        if self.row_limit is not None:
            rows = rows[:self.row_limit]

        count = len(rows) if self.count_mode else None
        if self.mode == "single":
            if len(rows) != 1:
                raise APIError({"message": "JSON object requested, multiple (or no) rows returned", "code": "PGRST116"})
            return FakeResponse(dict(rows[0]), count)
        if self.mode == "maybe_single":
            return FakeResponse(dict(rows[0]), count) if rows else None
        return FakeResponse([dict(r) for r in rows], count)


class FakeRpc:
    def __init__(self, client: FakeSupabase, name: str, params: dict | None) -> None:
        self.client = client
        self.name = name
        self.params = params or {}

    def execute(self) -> FakeResponse:
        handler = self.client.rpcs.get(self.name, _MISSING)
        if handler is _MISSING:
            raise APIError({"message": f"Could not find the function public.{self.name}", "code": "PGRST202"})
        if isinstance(handler, Exception):
            raise handler
        value = handler(self.params) if callable(handler) else handler
        return FakeResponse(value)


class FakeSupabase:
    def __init__(self, tables: dict | None = None, rpcs: dict | None = None) -> None:
        self.tables: dict[str, list[dict]] = tables or {}
        self.rpcs: dict[str, Any] = rpcs or {}
        self.failing_tables: dict[str, Exception] = {}
        self.queries: list[tuple[str, list]] = []
        self.rpc_calls: list[tuple[str, dict]] = []
        self.auth = MagicMock()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: dict | None = None) -> FakeRpc:
        self.rpc_calls.append((name, params or {}))
        return FakeRpc(self, name, params)


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_user(user_id: str = "user-1", email: str | None = "user@example.com",
              phone: str = "", full_name: str | None = "Awa Traoré") -> SimpleNamespace:
    return SimpleNamespace(
        id=user_id,
        email=email,
        phone=phone,
        user_metadata={"full_name": full_name} if full_name else {},
    )


def make_auth_response(user: SimpleNamespace, access_token: str = "access-token") -> SimpleNamespace:
    session = SimpleNamespace(access_token=access_token, refresh_token="refresh-token", user=user)
    return SimpleNamespace(user=user, session=session)


@pytest.fixture()
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def role_cache(clock: FakeClock) -> RoleCache:
    return RoleCache(ttl_seconds=30, clock=clock)


@pytest.fixture()
def auth_error():
    return FakeAuthError


@pytest.fixture()
def user_factory():
    return make_user


@pytest.fixture()
def auth_response_factory():
    return make_auth_response
