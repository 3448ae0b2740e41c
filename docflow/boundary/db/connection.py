"""
Database connection management.

Provides the async SQLAlchemy engine, session factory and schema creation
for the durable tier.

Dependencies: sqlalchemy, docflow.configs
System role: Database connection lifecycle management
"""

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from docflow.configs.database import DatabaseSettings
from docflow.boundary.db.base import Base


def get_async_engine(db_config: DatabaseSettings) -> AsyncEngine:
    """
    Create async SQLAlchemy engine with connection pooling.

    pool_pre_ping=True verifies connections before use to detect
    stale/broken connections early. SQLite URLs (tests, local runs) skip the
    pool settings; an in-memory SQLite database is shared through one
    static connection.

    Args:
        db_config: Database settings

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Usage:
        engine = get_async_engine(get_settings().database)
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    url = db_config.async_database_url
    if url.startswith("sqlite"):
        if ":memory:" in url:
            return create_async_engine(
                url,
                echo=db_config.echo_sql,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_async_engine(url, echo=db_config.echo_sql)

    return create_async_engine(
        url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


def get_async_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """
    Create async session factory for database operations.

    Returns async_sessionmaker bound to engine with autoflush=False and
    expire_on_commit=False so returned ORM objects stay readable after commit.

    Args:
        engine: Async engine

    Returns:
        async_sessionmaker: Async session factory

    Usage:
        SessionFactory = get_async_session_factory(engine)
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


async def create_all_tables(engine: AsyncEngine) -> None:
    """
    Create all tables registered on Base.metadata.

    Idempotent: existing tables remain unchanged.

    Args:
        engine: Async engine
    """
    # Import models to register them with Base.metadata
    from docflow.boundary.db.models import DocumentChunkModel, DocumentModel, JobModel  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
