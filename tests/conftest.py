"""
Shared fixtures: an application bound to a throwaway SQLite file, a test
client, and an async session for repository-level tests.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from fin_api.config import Settings
from fin_api.db.core import build_engine, build_session_factory, create_tables
from fin_api.main import create_app
from fin_api.security.tokens import TokenService


TEST_SECRET = "test-signing-key-with-enough-length-for-hs256"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}",
        jwt_secret=TEST_SECRET,
        context_timeout_seconds=5.0,
        app_log_level="WARNING",
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def token_service():
    return TokenService(TEST_SECRET)


@pytest.fixture
def auth_headers(client):
    """Register and log in a user, returning the Authorization header"""
    client.post("/v1/register", json={"email": "owner@example.com", "password": "pw", "name": "Owner"})
    r = client.post("/v1/login", json={"email": "owner@example.com", "password": "pw"})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest_asyncio.fixture
async def session(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'repo.db'}")
    await create_tables(engine)
    session_factory = build_session_factory(engine)
    async with session_factory() as db_session:
        yield db_session
    await engine.dispose()
