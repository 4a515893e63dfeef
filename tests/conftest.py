"""Shared fixtures: in-memory SQLite database, sessions and an ASGI test client.

Every test gets a fresh database; the request session dependency is
overridden so routes run against it.
"""

import os

# Configure before the app module builds its settings.
os.environ.setdefault("POSTGRES_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "false")
os.environ.setdefault("AUTO_SEED", "false")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from ninja_api.api.main import app  # noqa: E402
from ninja_api.db import Base  # noqa: E402
from ninja_api.db.session import get_async_session  # noqa: E402


@pytest.fixture
async def test_engine():
    # StaticPool: one shared connection, so every session sees the same memory DB
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_session_factory):
    """FastAPI test client with the session dependency overridden."""
    async def override_get_async_session():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_async_session

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def naruto_payload():
    return {
        "name": "Naruto Uzumaki",
        "village": "Konoha",
        "rank": "Kage",
        "chakra_type": "Vento",
        "strength_level": 98,
    }


@pytest.fixture
def full_payload():
    return {
        "name": "Sasuke Uchiha",
        "village": "Konoha",
        "clan": "Uchiha",
        "rank": "Jounin",
        "chakra_type": "Lightning",
        "specialty": "Ninjutsu",
        "kekkei_genkai": "Sharingan",
        "status": "Active",
        "strength_level": 95,
        "registration_date": "2024-01-01",
    }
