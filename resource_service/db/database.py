"""
Database engine and session management.

A ``Database`` owns one SQLAlchemy engine plus its session factory. The app
constructs one at startup and hands it to request handlers through the
``get_db`` dependency, so tests can run against isolated in-memory instances.
"""
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from resource_service.db import models

logger = logging.getLogger(__name__)


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _is_in_memory(url: str) -> bool:
    database = make_url(url).database
    return not database or database == ":memory:"


def _ensure_sqlite_directory(url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    database = make_url(url).database
    if not database or database == ":memory:":
        return
    Path(database).expanduser().parent.mkdir(parents=True, exist_ok=True)


def _engine_kwargs(url: str, echo: bool) -> dict:
    kwargs: dict = {"echo": echo}
    if _is_sqlite(url):
        kwargs["connect_args"] = {"check_same_thread": False}
        if _is_in_memory(url):
            # One shared connection so the schema persists across sessions
            kwargs["poolclass"] = StaticPool
    return kwargs


def _enable_sqlite_pragmas(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _set_pragmas(dbapi_connection, connection_record):  # pragma: no cover - driver callback
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class Database:
    """Explicitly constructed storage handle."""

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.url = url
        if _is_sqlite(url):
            _ensure_sqlite_directory(url)
        self.engine = create_engine(url, **_engine_kwargs(url, echo))
        if _is_sqlite(url):
            _enable_sqlite_pragmas(self.engine)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @classmethod
    def in_memory(cls) -> "Database":
        """Fresh private SQLite database, handy for tests."""
        return cls("sqlite+pysqlite:///:memory:")

    def create_all(self) -> None:
        """Create the resources table if it does not exist yet."""
        models.Base.metadata.create_all(bind=self.engine)
        logger.info("schema_ready: url=%s", self.engine.url.render_as_string(hide_password=True))

    def drop_all(self) -> None:
        models.Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database connections closed")

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()


def get_database(request: Request) -> Database:
    """Return the Database attached to the running app."""
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Application has no database configured")
    return database


def get_db(request: Request) -> Iterator[Session]:
    """Dependency to get a database session."""
    with get_database(request).session() as db:
        yield db
