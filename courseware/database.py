"""
courseware/database.py
Database configuration: async engine, session factory, request dependency
"""
import logging
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker

from courseware.config import settings
# Import Base from orm.base to avoid circular imports
from courseware.orm.base import Base
import courseware.orm  # ensures all models are registered

logger = logging.getLogger(__name__)


def _configure_sqlite_connection(dbapi_connection, connection_record):
    """
    Per-connection SQLite setup.

    The driver's own deferred BEGIN is switched off so that _begin_immediate
    controls when the transaction starts. Foreign keys are switched on so that
    ON DELETE CASCADE applies.
    """
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _begin_immediate(conn):
    """
    Take the SQLite write lock when the transaction starts.

    SELECT ... FOR UPDATE renders nothing on SQLite, so this is what makes two
    sessions touching the same parent or user row run one after the other.
    """
    conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(database_url: str, echo: bool = False, **kwargs) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    SQLite connections get foreign key enforcement and open every transaction
    with BEGIN IMMEDIATE; other backends get a standard connection pool and
    rely on row locks.
    """
    if "sqlite" in database_url.lower():
        kwargs.setdefault("connect_args", {"timeout": 30.0})
        new_engine = create_async_engine(database_url, echo=echo, future=True, **kwargs)
        event.listen(new_engine.sync_engine, "connect", _configure_sqlite_connection)
        event.listen(new_engine.sync_engine, "begin", _begin_immediate)
        return new_engine

    return create_async_engine(
        database_url,
        echo=echo,
        future=True,
        pool_pre_ping=True,
        pool_size=kwargs.pop("pool_size", 10),
        max_overflow=kwargs.pop("max_overflow", 20),
        pool_timeout=30,
        pool_recycle=3600,
        **kwargs
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine = build_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)
AsyncSessionLocal = build_session_factory(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting async database session.

    One session per request. Services commit at the end of a successful
    mutation; anything still pending when an exception escapes is rolled back.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db(bind: AsyncEngine = None):
    """Create all tables that do not exist yet."""
    bind = bind or engine
    logger.info(f"Initializing database ({bind.url.get_backend_name()})...")
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("✓ Database initialization complete")


async def drop_db(bind: AsyncEngine = None):
    """Drop every table. Used by `courseware db reset`."""
    bind = bind or engine
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.warning("All tables dropped")


async def close_db():
    """Close database connection"""
    await engine.dispose()
    logger.info("Database connection closed")
