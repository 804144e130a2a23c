"""
Database configuration and session management.
"""

import logging
from contextlib import contextmanager
from functools import lru_cache
from typing import Generator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from sqlalchemy.pool import NullPool, StaticPool

from app.config import settings


logger = logging.getLogger(__name__)

# Create declarative base
Base = declarative_base()


class Database:
    """
    Owns the engine and the session factory.
    One instance is shared per process and handed to request handlers
    through the ``get_db`` dependency.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.engine: Engine = self._create_engine(url, echo)
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
        )

    @staticmethod
    def _create_engine(url: str, echo: bool) -> Engine:
        if url.startswith("sqlite"):
            # In-memory SQLite must share one connection across sessions
            return create_engine(
                url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                echo=echo,
            )
        return create_engine(url, poolclass=NullPool, echo=echo)

    def create_tables(self) -> None:
        """Create all tables registered on the declarative base."""
        from app.infrastructure.db import models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        """Drop all tables registered on the declarative base."""
        from app.infrastructure.db import models  # noqa: F401
        Base.metadata.drop_all(bind=self.engine)

    def check_connection(self) -> bool:
        """Run a trivial query to check connectivity."""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database connection check failed: {str(e)}")
            return False

    def dispose(self) -> None:
        self.engine.dispose()


@lru_cache()
def get_database() -> Database:
    """Get the process-wide database, created on first use."""
    if not settings.database_url:
        raise RuntimeError("DATABASE_URL is not configured")
    return Database(settings.database_url, echo=settings.database_echo or settings.debug)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function to get database session.
    The whole request runs in one transaction: committed when the handler
    returns, rolled back when anything raises.
    """
    db = get_database().SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def session_scope(database: Optional[Database] = None) -> Generator[Session, None, None]:
    """Same transaction handling as ``get_db`` for scripts outside a request."""
    db = (database or get_database()).SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
