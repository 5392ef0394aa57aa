"""
Microblog Backend — Database Engine Setup
===========================================

What:  Async SQLAlchemy engine construction and the declarative base.
Why:   Keeps driver and pool options in one place; the store and the
       ORM models build on top of this module.
How:   `build_engine()` wraps create_async_engine. No connection is opened
       until the first statement runs, so building an engine is cheap and
       never touches the database file.

Architecture Decision:
    Async SQLAlchemy over aiosqlite keeps store I/O off the event loop, so a
    slow insert suspends only the request that issued it.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from microblog.config import settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which the store uses to create the
    `posts` table at startup.
    """
    pass


def build_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """
    Create the async engine (and its lazy connection pool).

    Args:
        database_url: Overrides settings.database_url (used by tests).

    Returns:
        An AsyncEngine; SQL echo is enabled only at DEBUG log level.
    """
    return create_async_engine(
        database_url or settings.database_url,
        pool_pre_ping=settings.db_pool_pre_ping,
        echo=settings.log_level == "DEBUG",
    )
