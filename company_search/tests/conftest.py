"""
Shared fixtures: an in-memory stand-in for the Supabase table builder

FakeSupabase implements the subset of the PostgREST builder used by the
services (select / or_ / in_ / eq / ilike / gte / lte / order / range /
execute) and evaluates it over a list of dict rows.
"""
import re
import time
from datetime import datetime, timedelta
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from company_search.main import app
from company_search.utils.supabase_client import get_db


# ============================================================================
# Fake PostgREST builder
# ============================================================================

def _like_regex(pattern: str) -> str:
    """Translate a LIKE pattern (backslash escapes, % and _ wildcards) to a regex"""
    parts, escaped = [], False
    for ch in pattern:
        if escaped:
            parts.append(re.escape(ch))
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == "%":
            parts.append(".*")
        elif ch == "_":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return "".join(parts)


def _ilike(value: Any, pattern: str) -> bool:
    if value is None:
        return False
    return re.fullmatch(_like_regex(pattern), str(value), flags=re.IGNORECASE | re.DOTALL) is not None


def _split_or(expr: str) -> List[str]:
    """Split an or=(...) body on commas that are not inside double quotes"""
    parts, current, quoted, escaped = [], "", False, False
    for ch in expr:
        if escaped:
            current += ch
            escaped = False
        elif ch == "\\":
            current += ch
            escaped = True
        elif ch == '"':
            current += ch
            quoted = not quoted
        elif ch == "," and not quoted:
            parts.append(current)
            current = ""
        else:
            current += ch
    parts.append(current)
    return parts


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        return re.sub(r"\\(.)", r"\1", value[1:-1])
    return value


class FakeQuery:
    def __init__(self, store: "FakeSupabase", table: str):
        self.store = store
        self.table = table
        self.columns: Optional[List[str]] = None
        self.count: Optional[str] = None
        self.head = False
        self.predicates = []
        self.orders = []
        self.bounds = None

    def _record(self, method: str, *args, **kwargs):
        self.store.calls.append((method, args, kwargs))
        return self

    def select(self, *columns, count=None, head=None):
        names = [c.strip() for col in columns for c in col.split(",")]
        self.columns = None if "*" in names else names
        self.count = count
        self.head = bool(head)
        return self._record("select", *columns, count=count, head=head)

    def or_(self, expr: str):
        alternatives = []
        for clause in _split_or(expr):
            column, op, value = clause.split(".", 2)
            assert op == "ilike", f"unsupported or_ operator {op}"
            alternatives.append((column, _unquote(value)))
        self.predicates.append(
            lambda row: any(_ilike(row.get(c), v) for c, v in alternatives)
        )
        return self._record("or_", expr)

    def in_(self, column: str, values):
        values = list(values)
        self.predicates.append(lambda row: row.get(column) in values)
        return self._record("in_", column, values)

    def eq(self, column: str, value):
        self.predicates.append(lambda row: row.get(column) == value)
        return self._record("eq", column, value)

    def ilike(self, column: str, pattern: str):
        self.predicates.append(lambda row: _ilike(row.get(column), pattern))
        return self._record("ilike", column, pattern)

    def gte(self, column: str, value):
        self.predicates.append(lambda row: row.get(column) is not None and row[column] >= value)
        return self._record("gte", column, value)

    def lte(self, column: str, value):
        self.predicates.append(lambda row: row.get(column) is not None and row[column] <= value)
        return self._record("lte", column, value)

    def order(self, column: str, desc: bool = False):
        self.orders.append((column, desc))
        return self._record("order", column, desc=desc)

    def range(self, start: int, end: int):
        self.bounds = (start, end)
        return self._record("range", start, end)

    def execute(self):
        self.store.executed += 1
        if self.store.delay:
            time.sleep(self.store.delay)
        if self.store.error is not None:
            raise self.store.error

        rows = [r for r in self.store.tables.get(self.table, []) if all(p(r) for p in self.predicates)]

        for column, desc in reversed(self.orders):
            present = [r for r in rows if r.get(column) is not None]
            missing = [r for r in rows if r.get(column) is None]
            present.sort(key=lambda r: r[column], reverse=desc)
            rows = present + missing

        count = len(rows) if self.count == "exact" else None

        if self.head:
            return SimpleNamespace(data=[], count=count)

        if self.bounds is not None:
            start, end = self.bounds
            rows = rows[start:end + 1]

        if self.columns is not None:
            rows = [{c: r.get(c) for c in self.columns} for r in rows]

        return SimpleNamespace(data=[dict(r) for r in rows], count=count)


class FakeSupabase:
    def __init__(self, tables: Optional[Dict[str, List[dict]]] = None):
        self.tables = tables or {}
        self.calls = []
        self.executed = 0
        self.error: Optional[Exception] = None
        # Seconds each execute() blocks, like a slow network round trip
        self.delay = 0.0

    def table(self, name: str) -> FakeQuery:
        self.calls.append(("table", (name,), {}))
        return FakeQuery(self, name)


# ============================================================================
# Sample data
# ============================================================================

def make_company(i: int, **overrides) -> dict:
    created = datetime(2024, 1, 1) + timedelta(hours=i)
    row = {
        "id": i,
        "abn": f"{51824753000 + i}",
        "entity_name": f"Company {i:03d} Pty Ltd",
        "state": "NSW",
        "postcode": f"2{i % 1000:03d}",
        "status": "ACT",
        "effective_from": f"{2019 + i % 3}{(i % 12) + 1:02d}{(i % 28) + 1:02d}",
        "entity_type": "Australian Private Company",
        "record_updated": f"2024{(i % 12) + 1:02d}15",
        "created_at": created.isoformat() + "+00:00",
    }
    row.update(overrides)
    return row


def make_companies() -> List[dict]:
    rows = []
    # 25 active companies across NSW / VIC
    for i in range(1, 26):
        rows.append(make_company(i, state="NSW" if i % 2 else "VIC"))
    # 5 cancelled NSW companies
    for i in range(26, 31):
        rows.append(make_company(i, status="CAN", entity_name=f"Closed Trading {i}"))
    # 4 active Queensland sole traders
    for i in range(31, 35):
        rows.append(make_company(i, state="QLD", entity_type="Sole Trader", entity_name=f"Reef Services {i}"))
    # Rows with blank classification columns
    rows.append(make_company(35, state="  ", status="", entity_type=None, entity_name="Unknown Holdings"))
    rows.append(make_company(36, state=None, status=None, entity_type="   ", entity_name="Blank Co"))
    return rows


@pytest.fixture
def companies() -> List[dict]:
    return make_companies()


@pytest.fixture
def make_row():
    """Factory for extra rows: make_row(id, **column_overrides)"""
    return make_company


@pytest.fixture
def fake_db(companies) -> FakeSupabase:
    return FakeSupabase({"abn_data": companies})


@pytest.fixture
def empty_db() -> FakeSupabase:
    return FakeSupabase({"abn_data": []})


@pytest.fixture
def api_client(fake_db):
    """TestClient with the Supabase dependency replaced by fake_db"""
    app.dependency_overrides[get_db] = lambda: fake_db
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
