"""
Blog Backend: Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Inventory:
    ├── fake_postgrest:    in-memory stand-in for the hosted /rest/v1 API
    ├── rest_store:        RestDataStore wired to fake_postgrest via MockTransport
    ├── unreachable_store: RestDataStore whose transport always fails to connect
    ├── sql_store:         SqlDataStore on a temporary SQLite file (aiosqlite)
    ├── mock_store:        AsyncMock DataStore for service-level tests
    └── rest_client / sql_client / unreachable_client:
                           HTTPX AsyncClient talking to create_app(data_store=...)
"""

import json
import os
from datetime import datetime, timezone

# Override settings BEFORE any blog_api import reads them
os.environ["DATA_STORE_BACKEND"] = "rest"
os.environ["SUPABASE_URL"] = "https://test-project.supabase.co"
os.environ["SUPABASE_ANON_KEY"] = "test-anon-key"
os.environ["LOG_LEVEL"] = "WARNING"

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from unittest.mock import AsyncMock

from blog_api.database import build_engine, create_schema
from blog_api.main import create_app
from blog_api.services.rest_store import RestDataStore
from blog_api.services.sql_store import SqlDataStore
from blog_api.services.store_base import DataStore

TEST_URL = "https://test-project.supabase.co"
TEST_KEY = "test-anon-key"


class FakePostgrest:
    """
    Minimal PostgREST emulation for the `posts` and `comments` tables.

    Supports `select=*`, `<column>=eq.<value>` filters, bulk insert with
    `Prefer: return=representation`, and the comments → posts foreign key.
    Every request is recorded in `self.requests`.
    """

    def __init__(self):
        self.tables = {"posts": [], "comments": []}
        self._next_id = {"posts": 1, "comments": 1}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        table = request.url.path.rsplit("/", 1)[-1]

        if table == "":
            return httpx.Response(200, json={"swagger": "2.0"})
        if table not in self.tables:
            return httpx.Response(
                404,
                json={
                    "code": "42P01",
                    "details": None,
                    "hint": None,
                    "message": f'relation "public.{table}" does not exist',
                },
            )

        if request.method == "GET":
            rows = self.tables[table]
            for column, value in request.url.params.multi_items():
                if column == "select":
                    continue
                _, _, operand = value.partition(".")
                rows = [row for row in rows if str(row.get(column)) == operand]
            return httpx.Response(200, json=rows)

        if request.method == "POST":
            payload = json.loads(request.content)
            if table == "comments":
                post_ids = {post["id"] for post in self.tables["posts"]}
                for row in payload:
                    if row.get("post_id") not in post_ids:
                        return httpx.Response(
                            409,
                            json={
                                "code": "23503",
                                "details": (
                                    f"Key (post_id)=({row.get('post_id')}) "
                                    'is not present in table "posts".'
                                ),
                                "hint": None,
                                "message": (
                                    'insert or update on table "comments" violates '
                                    'foreign key constraint "comments_post_id_fkey"'
                                ),
                            },
                        )

            inserted = []
            for row in payload:
                stored = dict(row)
                stored["id"] = self._next_id[table]
                stored["created_at"] = datetime.now(timezone.utc).isoformat()
                self._next_id[table] += 1
                inserted.append(stored)
            self.tables[table].extend(inserted)

            if request.headers.get("Prefer") == "return=representation":
                return httpx.Response(201, json=inserted)
            return httpx.Response(201)

        return httpx.Response(405, json={"message": f"Method {request.method} not allowed"})


def _refuse_connection(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("All connection attempts failed", request=request)


# ══════════════════════════════════════════════════════════════════════════
# Data Store Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def fake_postgrest():
    return FakePostgrest()


@pytest_asyncio.fixture
async def rest_store(fake_postgrest):
    store = RestDataStore(
        url=TEST_URL,
        key=TEST_KEY,
        transport=httpx.MockTransport(fake_postgrest),
    )
    yield store
    await store.close()


@pytest_asyncio.fixture
async def unreachable_store():
    store = RestDataStore(
        url=TEST_URL,
        key=TEST_KEY,
        transport=httpx.MockTransport(_refuse_connection),
    )
    yield store
    await store.close()


@pytest_asyncio.fixture
async def sql_store(tmp_path):
    """
    SqlDataStore on a fresh SQLite file with the blog schema.

    A file (not :memory:) so every pooled connection sees the same tables.
    """
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'blog.db'}")
    await create_schema(engine)
    store = SqlDataStore(engine)
    yield store
    await store.close()


@pytest.fixture
def mock_store():
    """
    A DataStore double: select/insert/health_check are AsyncMocks.

    Usage:
        mock_store.select.return_value = [{"id": 1, ...}]
    """
    store = AsyncMock(spec=DataStore)
    store.backend_name = "mock"
    store.select.return_value = []
    store.insert.return_value = []
    store.health_check.return_value = True
    return store


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client Fixtures
# ══════════════════════════════════════════════════════════════════════════

async def _client_for(store: DataStore):
    app = create_app(data_store=store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def rest_client(rest_store):
    async for client in _client_for(rest_store):
        yield client


@pytest_asyncio.fixture
async def sql_client(sql_store):
    async for client in _client_for(sql_store):
        yield client


@pytest_asyncio.fixture
async def unreachable_client(unreachable_store):
    async for client in _client_for(unreachable_store):
        yield client
