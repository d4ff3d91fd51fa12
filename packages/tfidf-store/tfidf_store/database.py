"""Database configuration and connection"""
from typing import AsyncGenerator, Optional
import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from .config import SETTINGS, to_async_url

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()


def build_async_engine(url: Optional[str] = None, **kwargs) -> AsyncEngine:
    """
    Create an async engine for the given URL

    Pool sizing only applies to server databases; SQLite keeps the
    driver's default pool.

    Args:
        url: Database URL, plain or async form (defaults to DATABASE_URL)
        **kwargs: Extra arguments forwarded to create_async_engine
    """
    async_url = to_async_url(url or SETTINGS.database_url)
    options = {"echo": SETTINGS.echo_sql, "pool_pre_ping": True}
    if not async_url.startswith("sqlite"):
        options.update(
            pool_size=SETTINGS.pool_size,
            max_overflow=SETTINGS.max_overflow,
            pool_timeout=SETTINGS.pool_timeout,
            pool_recycle=SETTINGS.pool_recycle,
        )
    options.update(kwargs)
    return create_async_engine(async_url, **options)


def build_session_factory(engine: AsyncEngine) -> sessionmaker:
    """Session factory bound to an engine"""
    return sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


# Async engine (for application)
async_engine = build_async_engine()

# Async session factory
AsyncSessionLocal = build_session_factory(async_engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting database session

    Repositories commit each operation on their own, so the session is
    only closed here, never committed as a whole.

    Usage in FastAPI:
        @app.get("/documents")
        async def list_documents(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db(engine: Optional[AsyncEngine] = None):
    """Initialize database (create tables)"""
    # Register the tables on Base.metadata
    from . import models  # noqa: F401

    engine = engine or async_engine
    logger.info("Initializing database...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized successfully")


async def drop_db(engine: Optional[AsyncEngine] = None):
    """Drop all tables (destructive)"""
    from . import models  # noqa: F401

    engine = engine or async_engine
    logger.warning("Dropping all tables...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def close_db(engine: Optional[AsyncEngine] = None):
    """Close database connections"""
    logger.info("Closing database connections...")
    await (engine or async_engine).dispose()
    logger.info("Database connections closed")
