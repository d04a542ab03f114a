"""Shared fixtures for the test suite."""

from __future__ import annotations

from datetime import date, datetime, timezone
from types import SimpleNamespace
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.db import Base, get_session
from app.footprint import tables  # noqa: F401  (registers tables on Base.metadata)
from app.main import app


# ---------------------------------------------------------------------------
# Fake DB session (no real Postgres needed)
# ---------------------------------------------------------------------------

class FakeSession:
    """Minimal stand-in for AsyncSession used in endpoint tests.

    Endpoint tests patch the connector/aggregation functions, so the session
    is only passed through.
    """

    async def execute(self, stmt, params=None):
        raise AssertionError("FakeSession.execute should not be reached")

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def fake_session():
    return FakeSession()


@pytest.fixture()
def override_session(fake_session):
    """Override the FastAPI dependency so no real DB is needed."""
    async def _override():
        yield fake_session

    app.dependency_overrides[get_session] = _override
    yield fake_session
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(override_session):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def user_headers() -> dict[str, str]:
    return {"X-User-Id": "user-a"}


@pytest.fixture()
async def db_session():
    """AsyncSession on a fresh in-memory SQLite database with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as session:
        yield session

    await engine.dispose()


@pytest.fixture()
async def db_client(db_session):
    """HTTP client wired to the in-memory SQLite session."""
    async def _override():
        yield db_session

    app.dependency_overrides[get_session] = _override
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def make_activity(
    d: date,
    transport: float = 0.0,
    energy: float = 0.0,
    food: float = 0.0,
    user_id: str = "user-a",
    row_id: int = 1,
) -> SimpleNamespace:
    """Helper to build an activity-like row with precomputed emissions."""
    return SimpleNamespace(
        id=row_id,
        user_id=user_id,
        date=d,
        transport_type=None,
        transport_distance=None,
        electricity_usage=None,
        natural_gas_usage=None,
        beef_servings=0,
        chicken_servings=0,
        vegetable_servings=0,
        transport_emissions=transport,
        energy_emissions=energy,
        food_emissions=food,
        total_emissions=round(transport + energy + food, 2),
        created_at=datetime(2026, 2, 15, 12, 0, tzinfo=timezone.utc),
    )


def make_goal(**overrides: Any) -> SimpleNamespace:
    defaults: dict[str, Any] = dict(
        id=1,
        user_id="user-a",
        type="monthly_target",
        target_value=200.0,
        current_value=100.0,
        period="month",
        start_date=date(2026, 2, 1),
        end_date=date(2026, 2, 28),
        achieved=False,
        created_at=datetime(2026, 2, 1, tzinfo=timezone.utc),
    )
    defaults.update(overrides)
    return SimpleNamespace(**defaults)
