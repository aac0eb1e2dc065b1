"""
Library Catalog — Database Engine & Session Factory
====================================================

What:  Async SQLAlchemy engine, session factory and declarative base.
How:   One engine per process with connection pooling. Repositories receive
       the session factory and open a short-lived session per operation.
Who:   Used by the SQL repositories, the health check and Alembic.

Session-per-operation:
    A single AsyncSession does not allow concurrent operations. The genre
    pages look up the genre and its books with asyncio.gather, so each lookup
    gets its own session (and therefore its own pooled connection).
"""

from typing import Any, Dict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from catalog.config import Settings, settings


def build_engine(config: Settings) -> AsyncEngine:
    """
    Create an async engine for the configured database URL.

    Pool options are only passed for server databases; the SQLite dialects
    pick their own pool class and reject QueuePool arguments for in-memory
    databases.
    """
    options: Dict[str, Any] = {
        # SQL echo is only useful while debugging queries
        "echo": config.log_level == "DEBUG",
    }
    if not config.is_sqlite:
        options.update(
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
            pool_pre_ping=config.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(config.database_url, **options)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: loaded attributes stay readable after the
    # session is closed, which is how repositories hand rows back
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


# ── Engine Configuration ──────────────────────────────────────────────────
engine = build_engine(settings)

# ── Session Factory ───────────────────────────────────────────────────────
async_session_factory = build_session_factory(engine)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for migrations.
    """
    pass


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Close all pooled connections. Called from the application lifespan."""
    await engine.dispose()
