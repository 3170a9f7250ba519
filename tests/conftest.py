"""
Pytest Configuration and Fixtures
=================================
Shared fixtures for unit and integration tests.
"""

import os

# Must be set before api.config is imported
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_JSON"] = "false"
os.environ["CALCULATION_RATE_LIMIT"] = "10000/minute"

from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from api.models import Base
from api.utils.seeders import seed_emission_factors
from carbon.emission_factors import InMemoryFactorTable
from carbon.emissions_calculator import EmissionsCalculator


# ═══════════════════════════════════════════════════════════════════════════════
# Calculator Fixtures
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.fixture
def factor_table() -> InMemoryFactorTable:
    """Reference emission factor catalogue."""
    return InMemoryFactorTable()


@pytest.fixture
def calculator(factor_table) -> EmissionsCalculator:
    """Calculator bound to the reference catalogue."""
    return EmissionsCalculator(factor_source=factor_table)


# ═══════════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ═══════════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Empty in-memory database session."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def seeded_session(db_session: AsyncSession) -> AsyncSession:
    """Database session with the reference catalogue loaded."""
    await seed_emission_factors(db_session)
    return db_session


# ═══════════════════════════════════════════════════════════════════════════════
# Application Fixtures
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.fixture(scope="module")
def client() -> Generator[TestClient, None, None]:
    """Test client; lifespan creates and seeds the in-memory database."""
    from api.main import app

    with TestClient(app) as test_client:
        yield test_client
