"""
CFIP: Database Service
"""
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
import structlog

from api.config import settings

logger = structlog.get_logger()


def _engine_options(database_url: str) -> dict:
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        # Single shared connection, otherwise each session sees an empty DB
        return {"poolclass": StaticPool}
    if database_url.startswith("sqlite"):
        return {}
    return {
        "pool_size": settings.DATABASE_POOL_SIZE,
        "max_overflow": 10,
        "pool_pre_ping": True,
    }


async_engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.ENV == "development" and settings.DEBUG and not settings.is_sqlite,
    **_engine_options(settings.DATABASE_URL),
)

AsyncSessionLocal = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db():
    from api.models import Base
    logger.info("Initializing database...")
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized")


async def check_db_health() -> dict:
    try:
        async with AsyncSessionLocal() as session:
            result = await session.execute(text("SELECT 1"))
            result.scalar_one()
            return {"status": "healthy", "message": "Database connection OK"}
    except Exception as e:
        logger.warning("database_health_check_failed", error=str(e))
        return {"status": "unhealthy", "message": str(e)}
