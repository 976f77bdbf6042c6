"""
Pytest configuration and fixtures.
"""
import json
import logging

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.auth import SupabaseAuthClient
from app.core.config import ConfigFile, get_config
from app.core.dependencies import get_auth_client, get_emission_estimator
from app.create_app import get_app
from app.database import Base
from app.database.base import get_async_engine, get_db_url
from app.database.session_manager.db_session import Database
from app.services.estimators.climatiq_client import ClimatiqClient
from app.services.estimators.emission_estimator import EmissionEstimator
from app.test.constants import MALFORMED_PROVIDER_TOKEN, TEST_TOKENS

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


class ClimatiqStub:
    """
    Scripted stand-in for the Climatiq API.

    ``responses`` maps a factor id to ``(status_code, body)``, or to an
    exception instance to raise from the transport. Unlisted factor ids get a
    422. Every request is recorded in ``requests``.
    """

    def __init__(self, responses: dict | None = None, headers: dict | None = None):
        self.responses = responses or {}
        self.headers = headers or {}
        self.requests: list[httpx.Request] = []

    @property
    def payloads(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests if r.content]

    @property
    def factor_ids(self) -> list[str]:
        return [p["emission_factor"]["activity_id"] for p in self.payloads]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/emission_factors"):
            status_code, body = self.responses.get(
                "__search__", (200, {"results": []})
            )
            return httpx.Response(status_code, json=body)

        factor_id = json.loads(request.content)["emission_factor"]["activity_id"]
        outcome = self.responses.get(
            factor_id,
            (422, {"error": "invalid_request", "message": f"No factor {factor_id}"}),
        )
        if isinstance(outcome, Exception):
            raise outcome
        status_code, body = outcome
        return httpx.Response(status_code, json=body, headers=self.headers)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def supabase_handler(request: httpx.Request) -> httpx.Response:
    token = request.headers.get("Authorization", "").removeprefix("Bearer ")
    if token == MALFORMED_PROVIDER_TOKEN:
        return httpx.Response(200, text="<html>upstream gateway</html>")
    if token in TEST_TOKENS:
        return httpx.Response(200, json=TEST_TOKENS[token])
    return httpx.Response(401, json={"message": "invalid JWT"})


@pytest.fixture(scope="session")
def test_config():
    """
    Get test configuration.

    Returns configuration with test database settings.
    """
    return get_config(ConfigFile.TEST)


@pytest.fixture
def climatiq_api_key(monkeypatch):
    monkeypatch.setenv("CLIMATIQ_API_KEY", "test-climatiq-key")
    return "test-climatiq-key"


@pytest.fixture
def climatiq_stub():
    return ClimatiqStub()


@pytest.fixture
def make_estimator(climatiq_stub):
    """Build an estimator whose HTTP calls go to ``climatiq_stub``."""

    def _make(api_key: str | None = "test-climatiq-key") -> EmissionEstimator:
        client = None
        if api_key:
            client = ClimatiqClient(
                api_key=api_key,
                base_url="https://api.climatiq.test/data/v1",
                transport=climatiq_stub.transport,
            )
        return EmissionEstimator(client)

    return _make


@pytest_asyncio.fixture(scope="function")
async def test_async_engine(test_config):
    """
    Create async database engine for testing.
    """
    test_engine = get_async_engine(get_db_url(test_config))

    yield test_engine

    await test_engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_cleanup(test_async_engine):
    """
    Clean database before and after each test.

    Drops all tables, recreates them, then drops again after test.
    """
    async with test_async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def initialize_db_session(test_config, db_cleanup):
    """
    Initialize Database singleton for testing.
    """
    Database.init(get_db_url(test_config))

    yield

    await Database.close()


@pytest_asyncio.fixture(scope="function")
async def test_app(test_config, climatiq_stub, make_estimator, initialize_db_session):
    """
    Create FastAPI application with test configuration.

    The estimator talks to ``climatiq_stub`` and bearer tokens are resolved
    against ``TEST_TOKENS``.
    """
    app = get_app(ConfigFile.TEST)
    app.state.config = test_config
    app.dependency_overrides[get_emission_estimator] = lambda: make_estimator()
    app.dependency_overrides[get_auth_client] = lambda: SupabaseAuthClient(
        "https://auth.supabase.test",
        "test-anon-key",
        transport=httpx.MockTransport(supabase_handler),
    )

    yield app


@pytest_asyncio.fixture(scope="function")
async def test_async_client(test_app):
    """
    Create async HTTP client for API testing.

    Uses httpx AsyncClient with ASGITransport for testing FastAPI endpoints.
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(
        transport=transport, base_url="http://localhost:8000", follow_redirects=True
    ) as ac:
        yield ac


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer valid-token"}


@pytest_asyncio.fixture(scope="function")
async def test_db_session(initialize_db_session):
    """
    Provide database session for tests.
    """
    async with Database() as session:
        yield session
