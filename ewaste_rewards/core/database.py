"""
Database configuration and session management
Uses SQLAlchemy with async support
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool
from typing import AsyncGenerator
import logging

from .config import settings
from .exceptions import PersistenceException
from ewaste_rewards.models.base import Base

logger = logging.getLogger(__name__)

def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine, skipping pool options SQLite doesn't support"""
    if database_url.startswith("sqlite"):
        return create_async_engine(
            database_url,
            echo=echo,
            poolclass=NullPool,
        )

    return create_async_engine(
        database_url,
        echo=echo,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_timeout=settings.DATABASE_POOL_TIMEOUT,
        pool_pre_ping=True,  # Verify connections before use
    )

def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

engine = build_engine(settings.database_url_async, echo=settings.DATABASE_ECHO)

AsyncSessionLocal = build_session_factory(engine)

# Database dependency
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Create and yield database session
    Services commit their own units of work; anything left open is rolled back
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

async def commit_or_raise(session: AsyncSession, action: str) -> None:
    """Commit the session's unit of work; storage failures roll back and surface"""
    try:
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Failed to commit {action}: {str(e)}")
        raise PersistenceException(f"Could not record {action}, please retry") from e

async def init_db(bind: AsyncEngine = engine) -> None:
    """Initialize database tables"""
    # Import models so every table is registered on the metadata
    import ewaste_rewards.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created successfully")

async def close_db(bind: AsyncEngine = engine) -> None:
    """Close database connections"""
    await bind.dispose()
    logger.info("Database connections closed")
