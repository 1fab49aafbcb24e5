"""Database configuration, session management and boot-time connectivity.

The engine is built from ``settings.database_url``. SQLite (the default) and
PostgreSQL are both supported; everything dialect-specific lives here or in
the RSVP upsert.

SQLite Configuration Choices:
    - **Foreign Keys**: SQLite has foreign key support but it's disabled by
      default for backwards compatibility. We enable it on every connection so
      that deleting a participant cascades to its RSVPs and an RSVP for an
      unknown participant is rejected by the store.

    - **check_same_thread=False**: Required for FastAPI. Sessions handed out by
      the dependency may be used from a different worker thread than the one
      that opened the connection.
"""
import logging
import time

from sqlalchemy import event as sa_event
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, SQLModel, create_engine

from rnrsvp.core.config import settings

logger = logging.getLogger(__name__)


class DatabaseUnavailable(RuntimeError):
    """Raised when the database never answered during startup."""


def enable_sqlite_foreign_keys(target: Engine) -> None:
    """Turn on ``PRAGMA foreign_keys`` for every new SQLite connection.

    The pragma is connection-level, not database-level, so it must be set each
    time a connection is established from the pool.
    """

    @sa_event.listens_for(target, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str) -> Engine:
    """Create the pooled engine for ``url``."""
    if url.startswith("sqlite"):
        new_engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            echo=settings.debug,  # Log SQL statements when DEBUG=true
        )
        enable_sqlite_foreign_keys(new_engine)
        return new_engine

    return create_engine(url, echo=settings.debug, pool_pre_ping=True)


engine = build_engine(settings.database_url)


def wait_for_database(
    target: Engine,
    attempts: int,
    delay: float,
    sleep=time.sleep,
) -> int:
    """Poll the database until it answers ``SELECT 1``.

    Makes at most ``attempts`` probes with ``delay`` seconds between them and
    returns the attempt number that succeeded. Raises DatabaseUnavailable once
    the budget is spent.
    """
    attempt = 0
    while attempt < attempts:
        attempt += 1
        try:
            with target.connect() as connection:
                connection.execute(text("SELECT 1"))
        except OperationalError as e:
            logger.warning(
                f"Database not ready (attempt {attempt}/{attempts}): {e.orig}"
            )
            if attempt < attempts:
                sleep(delay)
            continue
        logger.info(f"Database reachable after {attempt} attempt(s)")
        return attempt

    raise DatabaseUnavailable(f"Database unreachable after {attempts} attempts")


def create_db_and_tables(target: Engine | None = None) -> None:
    """Create all database tables."""
    SQLModel.metadata.create_all(target or engine)


def get_session():
    """Dependency for getting database session.

    The ``with`` block returns the connection to the pool on every exit path,
    including exceptions raised by the route.
    """
    with Session(engine) as session:
        yield session
