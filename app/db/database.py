"""
Database Connection Module

Async SQLAlchemy engine and session factory.

Production runs on PostgreSQL through asyncpg; local development and the
test-suite run on SQLite through aiosqlite. Every storage call carries a
timeout (DB_TIMEOUT_SECONDS) so an unreachable database surfaces as an
error instead of hanging the request.
"""

import logging
from typing import AsyncGenerator, Any, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.core.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


def _engine_options(database_url: str) -> Dict[str, Any]:
    """Driver-specific timeout and pool options."""
    timeout = settings.DB_TIMEOUT_SECONDS

    if database_url.startswith("sqlite"):
        # aiosqlite: busy timeout while waiting on a locked database
        return {"connect_args": {"timeout": timeout}}

    options: Dict[str, Any] = {
        "pool_pre_ping": True,
        "pool_timeout": timeout,
    }
    if database_url.startswith("postgresql+asyncpg"):
        options["connect_args"] = {"timeout": timeout, "command_timeout": timeout}
    if settings.DB_POOL_MIN_SIZE is not None:
        options["pool_size"] = settings.DB_POOL_MIN_SIZE
    if settings.DB_POOL_MAX_SIZE is not None:
        options["max_overflow"] = max(
            settings.DB_POOL_MAX_SIZE - (settings.DB_POOL_MIN_SIZE or 5), 0
        )
    return options


engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.SQLALCHEMY_ECHO,
    **_engine_options(settings.DATABASE_URL),
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency injection function for getting a database session.

    Usage in FastAPI endpoints:
        @router.get("/")
        async def my_endpoint(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create all tables. Used for SQLite development databases; Postgres uses Alembic."""
    # Import models so they register on Base.metadata
    import app.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ensured")


async def check_db_connection() -> bool:
    """Return True if the database answers a trivial query."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False


async def close_db() -> None:
    """Dispose the engine's connection pool on shutdown."""
    await engine.dispose()
    logger.info("Database engine disposed")
