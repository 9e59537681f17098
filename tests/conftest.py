"""Pytest configuration and fixtures."""

import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock, patch

import pytest

# Set testing environment BEFORE any other imports
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOCAL_CACHE_DIR", "")
os.environ.setdefault("ADMIN_API_KEY", "global-test-key")

import httpx
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.entities import Order, OrderStatus, Store
from src.integrations.local_cache import LocalCache
from src.integrations.payments_api import PaymentsAPIClient
from src.services.persistence import PersistenceGateway


@pytest.fixture
def local_cache() -> LocalCache:
    """In-memory local cache."""
    return LocalCache(directory=None, namespace="test")


@pytest.fixture
def remote_client() -> PaymentsAPIClient:
    """Remote client pointing at nothing in particular (patch it per test)."""
    return PaymentsAPIClient(base_url="http://payments.test/api", timeout=1.0)


@pytest.fixture
def offline_gateway(remote_client, local_cache):
    """Gateway whose remote service refuses every connection."""
    with patch.object(
        remote_client,
        "_request",
        new_callable=AsyncMock,
        side_effect=httpx.ConnectError("Connection refused"),
    ):
        yield PersistenceGateway(remote_client, local_cache)


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Fresh in-memory SQLite database with the schema created."""
    from src.models import Base

    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def api_app(session_factory):
    """The FastAPI app wired to the test database."""
    from src.api.main import app
    from src.database import get_session

    async def override_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_session
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(api_app) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=api_app),
        base_url="http://test",
    ) as client:
        yield client


@pytest_asyncio.fixture
async def online_gateway(api_app, local_cache) -> AsyncGenerator[PersistenceGateway, None]:
    """Gateway whose remote service is the in-process API."""
    remote = PaymentsAPIClient(
        base_url="http://test/api",
        transport=ASGITransport(app=api_app),
    )
    yield PersistenceGateway(remote, local_cache)
    await remote.close()


@pytest.fixture
def sample_store() -> Store:
    """Store with its own fee settings."""
    return Store(
        id="store_abc123",
        name="Corner Bakery",
        description="Bread and cakes",
        api_key="store-key",
        fee_percent=0.99,
        fee_fixed=0.50,
    )


@pytest.fixture
def sample_orders() -> list[Order]:
    """Two completed orders and one pending, no store scope."""
    return [
        Order(amount=100, description="Cake", status=OrderStatus.COMPLETED),
        Order(amount=20, description="Bread", status=OrderStatus.PENDING),
        Order(amount=5000, description="Wedding", status=OrderStatus.COMPLETED),
    ]
