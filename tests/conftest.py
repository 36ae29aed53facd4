"""
Root conftest.py for openbalti tests.

Fixtures are organized by category:
- Database fixtures (in-memory Mongo via mongomock-motor)
- Auth fixtures (one user per role)
- API fixtures (FastAPI app, client)
"""

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from openbalti.api.fastapi import create_app
from openbalti.api.fastapi.db.nosql.mongo.deps import get_db
from openbalti.app.settings import get_app_settings
from openbalti.db.nosql.indexes import ensure_indexes
from tests.helpers import make_user


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_collection_modifyitems(config, items):
    """Tag tests by folder so `-m api`, `-m cli` and `-m security` select them."""
    for item in items:
        norm = str(item.fspath).replace("\\", "/")
        if "/tests/api/" in norm:
            item.add_marker(pytest.mark.api)
        if "/tests/cli/" in norm:
            item.add_marker(pytest.mark.cli)
        if "/tests/unit/security/" in norm or norm.endswith(("test_auth_routes.py", "test_admin_routes.py")):
            item.add_marker(pytest.mark.security)


def pytest_configure(config):
    # Ensure custom markers are registered even if pyproject.toml isn't picked up in some contexts
    for name, desc in [
        ("security", "auth, session and permission tests"),
        ("api", "HTTP route tests"),
        ("cli", "command line tests"),
    ]:
        config.addinivalue_line("markers", f"{name}: {desc}")


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture
def mongo_db():
    """A fresh in-memory database per test."""
    return AsyncMongoMockClient()["openbalti_test"]


@pytest_asyncio.fixture
async def db(mongo_db):
    await ensure_indexes(mongo_db)
    return mongo_db


# =============================================================================
# AUTH FIXTURES
# =============================================================================


@pytest_asyncio.fixture
async def user(db) -> dict:
    return await make_user(db, name="Amina", email="amina@example.com")


@pytest_asyncio.fixture
async def other_user(db) -> dict:
    return await make_user(db, name="Karim", email="karim@example.com")


@pytest_asyncio.fixture
async def contributor(db) -> dict:
    return await make_user(db, name="Sakina", email="sakina@example.com", role="contributor")


@pytest_asyncio.fixture
async def admin(db) -> dict:
    return await make_user(db, name="Admin", email="admin@example.com", role="admin")


@pytest_asyncio.fixture
async def owner(db) -> dict:
    return await make_user(db, name="Owner", email="owner@example.com", role="owner")


# =============================================================================
# API FIXTURES
# =============================================================================


@pytest.fixture
def media_root(tmp_path, monkeypatch):
    root = tmp_path / "media"
    monkeypatch.setenv("APP_MEDIA_ROOT", str(root))
    get_app_settings.cache_clear()
    yield root
    get_app_settings.cache_clear()


@pytest.fixture
def app(db, media_root):
    app = create_app(with_mongo=False)

    async def _db_override():
        return db

    app.dependency_overrides[get_db] = _db_override
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
