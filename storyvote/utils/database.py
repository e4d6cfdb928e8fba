"""
Database configuration and session management for the StoryVote service.

This module provides:
- Database URL resolution for the testing, development and production environments
- Async SQLAlchemy engine and session factory
- Table creation at startup
- Dependency function for FastAPI to get database sessions

SQLite (via aiosqlite) is used for development and testing, PostgreSQL (via
asyncpg) in production.
"""

import os
import logging
from typing import AsyncGenerator, Optional
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool, StaticPool
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

# Import all models so they are registered on the metadata
from storyvote.models import Base

def get_database_url() -> str:
    """
    Get database URL based on environment.

    Returns:
        str: Database connection URL
    """
    # For testing, always use in-memory SQLite
    if os.getenv("TESTING", "").lower() == "true":
        logger.info("Using in-memory SQLite database for testing")
        return "sqlite+aiosqlite://"

    env = os.getenv("ENVIRONMENT", os.getenv("ENV", "development")).lower()
    logger.info(f"Current environment: {env}")

    if env == "development":
        db_url = os.getenv("DATABASE_URL_DEV")
        if db_url:
            # Fix potential newline issues in .env file
            db_url = db_url.split('\n')[0].strip()
            return _to_async_url(db_url)

        logger.info("Using default SQLite database for development")
        return "sqlite+aiosqlite:///storyvote_dev.db"

    db_url = os.getenv("DATABASE_URL")
    if db_url:
        db_url = db_url.split('\n')[0].strip()
        db_type = "PostgreSQL" if db_url.startswith("postgresql") else "SQLite"
        logger.info(f"Using {db_type} database for {env}")
        return _to_async_url(db_url)

    logger.warning("No DATABASE_URL found, falling back to SQLite")
    return "sqlite+aiosqlite:///storyvote.db"

def _to_async_url(db_url: str) -> str:
    """Rewrite plain driver URLs to their async equivalents."""
    if db_url.startswith("sqlite:///") or db_url == "sqlite://":
        return db_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    if db_url.startswith("postgresql://"):
        return db_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if db_url.startswith("postgres://"):
        return db_url.replace("postgres://", "postgresql+asyncpg://", 1)
    return db_url

def is_memory_database(database_url: str) -> bool:
    """True for SQLite URLs that point at an in-memory database."""
    return database_url.startswith("sqlite") and (
        database_url.endswith("://") or ":memory:" in database_url
    )

def get_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """
    Get an async SQLAlchemy engine configured for the database type.

    Args:
        database_url: Database URL. If None, determined from environment.

    Returns:
        AsyncEngine: Configured SQLAlchemy engine
    """
    if database_url is None:
        database_url = get_database_url()

    debug_mode = os.getenv("DEBUG", "False").lower() == "true"

    connect_args = {}
    engine_args = {
        "echo": debug_mode,
    }

    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        if is_memory_database(database_url):
            # One shared connection, otherwise every session sees an empty database
            engine_args["poolclass"] = StaticPool
        else:
            engine_args["poolclass"] = NullPool

    elif database_url.startswith("postgresql"):
        pool_size = int(os.getenv("POOL_SIZE", "5"))
        max_overflow = int(os.getenv("MAX_OVERFLOW", "10"))

        engine_args.update({
            "pool_size": pool_size,
            "max_overflow": max_overflow,
            "pool_timeout": int(os.getenv("POOL_TIMEOUT", "30")),
            "pool_recycle": int(os.getenv("POOL_RECYCLE", "1800")),  # 30 minutes
            "pool_pre_ping": True
        })
        logger.info(f"Using connection pool for PostgreSQL (size={pool_size}, max_overflow={max_overflow})")

    return create_async_engine(
        database_url,
        connect_args=connect_args,
        **engine_args
    )

def get_session_local(engine: Optional[AsyncEngine] = None) -> async_sessionmaker:
    """
    Get the async session factory for an engine.

    Args:
        engine: SQLAlchemy engine. If None, a new engine is created.

    Returns:
        async_sessionmaker: Configured session factory
    """
    if engine is None:
        engine = get_engine()

    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )

# Create default engine and session factory
engine = get_engine()
SessionLocal = get_session_local(engine)

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session.

    This is a FastAPI dependency that provides a database session
    for route handlers.

    Yields:
        AsyncSession: A database session
    """
    async with SessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()

async def create_tables(target_engine: Optional[AsyncEngine] = None) -> None:
    """Create all tables that do not exist yet."""
    target_engine = target_engine or engine
    async with target_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

async def init_db() -> None:
    """Initialize the database.

    This function should be called during application startup.
    """
    try:
        await create_tables()
        logger.info(f"Database initialized ({engine.url.drivername})")
    except Exception as e:
        logger.error(f"Error initializing database: {str(e)}")
        raise

async def close_db() -> None:
    """Close the database connection.

    This function should be called during application shutdown.
    """
    try:
        await engine.dispose()
        logger.info("Closed database connection")
    except Exception as e:
        logger.error(f"Error closing database connection: {str(e)}")
        raise
