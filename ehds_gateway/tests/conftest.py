"""Shared fixtures: in-memory stand-ins for the supabase query builder and RPC."""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from ehds_gateway.api import create_app


def no_rows_error() -> APIError:
    return APIError(
        {
            "message": "JSON object requested, multiple (or no) rows returned",
            "code": "PGRST116",
            "details": "The result contains 0 rows",
            "hint": None,
        }
    )


class FakeQuery:
    """Chainable subset of the postgrest select builder."""

    def __init__(self, store: "FakeSupabase", table: str):
        self._store = store
        self._table = table
        self._columns = None
        self._filters = []
        self._order = None
        self._single = False
        self._limit = None

    def select(self, columns: str):
        self._store.selects.append((self._table, columns))
        self._columns = [c.strip() for c in columns.split(",")]
        return self

    def eq(self, column, value):
        self._filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self._order = (column, desc)
        return self

    def limit(self, n):
        self._limit = n
        return self

    def single(self):
        self._single = True
        return self

    def execute(self):
        if self._table in self._store.failing_tables:
            raise self._store.failing_tables[self._table]

        rows = [dict(r) for r in self._store.tables.get(self._table, [])]
        for column, value in self._filters:
            rows = [r for r in rows if r.get(column) == value]
        if self._order:
            column, desc = self._order
            rows.sort(key=lambda r: r[column], reverse=desc)
        if self._limit is not None:
            rows = rows[: self._limit]
        if self._columns and not self._store.ignore_select:
            rows = [{c: r.get(c) for c in self._columns} for r in rows]

        if self._single:
            if len(rows) != 1:
                raise no_rows_error()
            return SimpleNamespace(data=rows[0], count=None)
        return SimpleNamespace(data=rows, count=None)


class FakeRpc:
    def __init__(self, store: "FakeSupabase", name: str, params: dict):
        self._store = store
        self._name = name
        self._params = params

    def execute(self):
        if self._store.rpc_error is not None:
            raise self._store.rpc_error
        assert self._name == "consume_rate_limit"
        return SimpleNamespace(data=self._store.consume(**self._params), count=None)


class FakeSupabase:
    """In-memory content tables plus the consume_rate_limit function."""

    def __init__(self, tables=None, now=None):
        self.tables = tables or {}
        self.rate_limits = {}
        self.now = now or datetime.now(timezone.utc)
        self.failing_tables = {}
        self.rpc_error = None
        self.ignore_select = False
        self.selects = []
        self.rpc_calls = 0

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: dict) -> FakeRpc:
        self.rpc_calls += 1
        return FakeRpc(self, name, params)

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)

    def consume(self, p_identifier, p_max_requests, p_window_seconds):
        cutoff = self.now - timedelta(seconds=p_window_seconds)
        row = self.rate_limits.get(p_identifier)
        allowed = True
        if row is None or row["window_start"] < cutoff:
            row = {"request_count": 1, "window_start": self.now}
        elif row["request_count"] < p_max_requests:
            row = {"request_count": row["request_count"] + 1, "window_start": row["window_start"]}
        else:
            allowed = False
        self.rate_limits[p_identifier] = row
        return [
            {
                "identifier": p_identifier,
                "request_count": row["request_count"],
                "window_start": row["window_start"].isoformat(),
                "allowed": allowed,
            }
        ]


ARTICLES = [
    {
        "article_number": n,
        "title": f"Article {n} title",
        "content": f"Content of article {n}",
        "chapter_id": 1 + n // 10,
        "section_id": None,
        "internal_notes": "draft, do not publish",
        "updated_by": "editor@example.com",
    }
    for n in (3, 1, 5, 2, 4)
]

RECITALS = [
    {"recital_number": 2, "content": "Second recital", "related_articles": [1, 3], "is_published": True},
    {"recital_number": 1, "content": "First recital", "related_articles": [], "is_published": True},
]

DEFINITIONS = [
    {"term": "personal electronic health data", "definition": 'Data "concerning" health,\nprocessed electronically', "source_article": 2, "id": "d2"},
    {"term": "electronic health record", "definition": "A collection of health data", "source_article": 2, "id": "d1"},
]

CHAPTERS = [
    {"chapter_number": 2, "title": "Primary use", "description": "Rights of natural persons"},
    {"chapter_number": 1, "title": "General provisions", "description": "Subject matter and scope"},
]

IMPLEMENTING_ACTS = [
    {
        "id": "ia-1",
        "title": "EHR system requirements",
        "description": "Essential requirements",
        "type": "implementing",
        "theme": "ehr",
        "status": "pending",
        "article_reference": "Art. 36",
        "related_articles": [36, 37],
        "feedback_deadline": None,
        "created_by": "admin",
    }
]


@pytest.fixture
def fake_supabase():
    return FakeSupabase(
        tables={
            "articles": [dict(r) for r in ARTICLES],
            "recitals": [dict(r) for r in RECITALS],
            "definitions": [dict(r) for r in DEFINITIONS],
            "chapters": [dict(r) for r in CHAPTERS],
            "implementing_acts": [dict(r) for r in IMPLEMENTING_ACTS],
        }
    )


@pytest.fixture
def rate_limit_env(monkeypatch):
    monkeypatch.delenv("API_RATE_LIMIT_MAX_REQUESTS", raising=False)
    monkeypatch.delenv("API_RATE_LIMIT_WINDOW_SECONDS", raising=False)
    monkeypatch.delenv("API_CACHE_MAX_AGE", raising=False)
    monkeypatch.delenv("API_CSV_FILENAME_PREFIX", raising=False)
    monkeypatch.delenv("API_TRUSTED_PROXY_HEADERS", raising=False)


@pytest.fixture
def client(fake_supabase, rate_limit_env):
    app = create_app(supabase_client=fake_supabase)
    return TestClient(app)
