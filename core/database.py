"""
Database engine and session management with SQLAlchemy async
"""

from pathlib import Path
from typing import Union

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
import logging

logger = logging.getLogger(__name__)


def sqlite_url(database_path: Union[str, Path]) -> str:
    """Build an aiosqlite URL for a file path"""
    return f"sqlite+aiosqlite:///{Path(database_path)}"


def create_engine_for_path(database_path: Union[str, Path], echo: bool = False) -> AsyncEngine:
    """Create an async engine bound to a single SQLite file"""
    logger.debug(f"Creating engine for {database_path}")
    return create_async_engine(
        sqlite_url(database_path),
        echo=echo,
        poolclass=NullPool,  # One writer per run, no pooling needed
        future=True
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker:
    """Create session factory for an engine"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )
