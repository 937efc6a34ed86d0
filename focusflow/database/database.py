"""Database connection and session management for FocusFlow.

This module supports both:
- Local SQLite (default for dev)
- PostgreSQL in production via `DATABASE_URL`

The process entry point owns a single `Database` (engine + session factory).
Routes get a request-scoped `Session` from `get_db`, which reads the
`Database` attached to the running app.
"""

import logging
import os
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# Database URL - SQLite by default (local dev)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./focusflow.db")

# Base class for declarative models
Base = declarative_base()


def _is_sqlite_url(database_url: str) -> bool:
    return "sqlite" in (database_url or "")


def _is_memory_url(database_url: str) -> bool:
    return _is_sqlite_url(database_url) and (":memory:" in database_url or database_url.rstrip("/") == "sqlite:")


def get_engine_kwargs(database_url: str) -> dict:
    """Return deterministic create_engine kwargs for a DB URL.

    This is separated to allow deterministic unit testing without connecting.
    """
    engine_kwargs: dict = {
        "echo": os.getenv("DEBUG", "False").lower() == "true",
        # Helps avoid stale DB connections.
        "pool_pre_ping": True,
    }

    if _is_sqlite_url(database_url):
        # SQLite-specific setting required for FastAPI concurrency in a single process.
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_url(database_url):
            # Every connection must see the same in-memory database.
            engine_kwargs["poolclass"] = StaticPool
        return engine_kwargs

    # Postgres / other DBs: keep pooling conservative.
    engine_kwargs["pool_size"] = int(os.getenv("DB_POOL_SIZE", "5"))
    engine_kwargs["max_overflow"] = int(os.getenv("DB_MAX_OVERFLOW", "5"))
    engine_kwargs["pool_timeout"] = int(os.getenv("DB_POOL_TIMEOUT_SEC", "30"))
    return engine_kwargs


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    """Enable foreign keys (cascade on user delete) and WAL on SQLite connections."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def build_engine(database_url: str) -> Engine:
    engine = create_engine(database_url, **get_engine_kwargs(database_url))
    if _is_sqlite_url(database_url):
        event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


class Database:
    """Owns the engine and session factory for one database."""

    def __init__(self, database_url: str = DATABASE_URL):
        self.database_url = database_url
        self.engine = build_engine(database_url)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def init_schema(self) -> None:
        """Initialize database schema.

        - SQLite (default dev): use `create_all()`.
        - PostgreSQL: prefer Alembic migrations for deterministic schema.
          Enable by setting `RUN_MIGRATIONS=true` in the environment.
        """
        # Register tables on Base.metadata
        from focusflow.database import models  # noqa: F401

        run_migrations = os.getenv("RUN_MIGRATIONS", "False").lower() == "true"
        if run_migrations and not _is_sqlite_url(self.database_url):
            from alembic import command
            from alembic.config import Config

            alembic_cfg = Config(os.getenv("ALEMBIC_INI", "alembic.ini"))
            # Ensure Alembic uses the same runtime DB URL.
            alembic_cfg.set_main_option("sqlalchemy.url", self.database_url)
            alembic_cfg.attributes["url_overridden"] = True
            alembic_cfg.attributes["configure_logger"] = False
            logger.info("Running Alembic migrations to head")
            command.upgrade(alembic_cfg, "head")
            return

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema ready")

    def session(self) -> Iterator[Session]:
        """Yield a session and close it afterwards."""
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database engine disposed")


def get_db(request: Request) -> Iterator[Session]:
    """Get database session (dependency for FastAPI)."""
    yield from request.app.state.database.session()
