"""
Engine and session plumbing shared by the repositories.

Every repository gets its own engine bound to its service's database URL
and creates only the tables it manages.
"""

from typing import Optional, Sequence

from loguru import logger
from sqlalchemy import Table, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .models import Base


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create a synchronous SQLAlchemy engine.

    Async driver suffixes are stripped. In-memory SQLite is pinned to a
    single shared connection so every thread sees the same database.
    """
    database_url = database_url.replace("+aiosqlite", "").replace("+asyncpg", "")

    engine_kwargs = {"echo": echo}
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        engine_kwargs["poolclass"] = StaticPool

    return create_engine(database_url, **engine_kwargs)


class Repository:
    """Base class owning an engine, a session factory and a set of tables."""

    tables: Sequence[Table] = ()

    def __init__(self, database_url: Optional[str] = None, echo: bool = False):
        self.database_url = database_url or "sqlite:///:memory:"
        self.engine = create_db_engine(self.database_url, echo=echo)

        Base.metadata.create_all(self.engine, tables=list(self.tables))

        self.SessionLocal = sessionmaker(bind=self.engine, expire_on_commit=False)

        logger.info(f"{type(self).__name__} initialized: {self.database_url[:50]}")

    def get_session(self) -> Session:
        """Get database session."""
        return self.SessionLocal()

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()
