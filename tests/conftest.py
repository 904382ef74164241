"""Pytest configuration and shared fixtures."""

import os

# Settings are read at import time; provide test values before importing the app.
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from main import create_application  # noqa: E402
from managerh.db.session import build_session_factory  # noqa: E402
from managerh.models import Base, Company  # noqa: E402
from tests.factories import DEFAULT_PASSWORD, make_company  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite://"


# ============================================================
# Database
# ============================================================


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database per test; StaticPool keeps one shared connection."""
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def company_a(db: AsyncSession) -> Company:
    return await make_company(db, "11111111111111", "Company A")


@pytest_asyncio.fixture
async def company_b(db: AsyncSession) -> Company:
    return await make_company(db, "22222222222222", "Company B")


# ============================================================
# Application
# ============================================================


@pytest_asyncio.fixture
async def app(engine, session_factory):
    """Application wired to the per-test database."""
    application = create_application(TEST_DATABASE_URL)
    await application.state.engine.dispose()
    application.state.engine = engine
    application.state.session_factory = session_factory
    yield application


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


async def register_and_login(
    client: AsyncClient,
    siret: str,
    name: str = "Acme SAS",
    password: str = DEFAULT_PASSWORD,
) -> dict[str, str]:
    """Register a company through the API and return its auth headers."""
    response = await client.post(
        "/register", json={"name": name, "siret": siret, "password": password}
    )
    assert response.status_code == 201, response.text
    response = await client.post("/login", data={"username": siret, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest_asyncio.fixture
async def headers_a(client: AsyncClient) -> dict[str, str]:
    return await register_and_login(client, "11111111111111", name="Company A")


@pytest_asyncio.fixture
async def headers_b(client: AsyncClient) -> dict[str, str]:
    return await register_and_login(client, "22222222222222", name="Company B")
