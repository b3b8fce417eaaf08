"""Engine and session lifecycle for the marketplace store."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import get_config
from app.models import Base

logger = logging.getLogger(__name__)

config = get_config()
LOCAL_SQLITE_URL = "sqlite:///./teckion.db"

DATABASE_URL: str
engine: Engine
SessionLocal: sessionmaker


def _engine_options(database_url: str) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": config.DEBUG and not config.is_production, "pool_pre_ping": True}
    if database_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
    else:
        options.update(pool_recycle=3600, pool_size=10, max_overflow=20)
    return options


def reset_engine(database_url: str | None = None) -> None:
    """Bind the module-level engine and session factory to `database_url` (default: current URL)."""
    global DATABASE_URL, engine, SessionLocal
    DATABASE_URL = database_url or DATABASE_URL
    engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


reset_engine(config.DATABASE_URL)


def get_engine() -> Engine:
    return engine


def get_active_database_url() -> str:
    """URL currently bound, which differs from config after a SQLite fallback."""
    return DATABASE_URL


def create_tables() -> None:
    Base.metadata.create_all(bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """Session for scripts and startup hooks, rolled back on error."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def _ping() -> None:
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def verify_database_connection() -> bool:
    """Check connectivity; when it is optional, fall back to the local SQLite file."""
    try:
        _ping()
        return True
    except Exception as exc:  # pragma: no cover - exercised in deployment.
        if config.DB_CONNECTIVITY_REQUIRED:
            logger.exception("database.connection_failed", extra={"event": "database.connection_failed"})
            return False
        logger.warning(
            "database.connection_failed.optional",
            extra={"event": "database.connection_failed.optional", "error": str(exc)},
        )
        return _fall_back_to_sqlite()


def _fall_back_to_sqlite() -> bool:
    if DATABASE_URL.startswith("sqlite"):
        return False

    original_url = DATABASE_URL
    reset_engine(LOCAL_SQLITE_URL)
    try:
        _ping()
    except Exception as exc:  # pragma: no cover - deployment edge case.
        reset_engine(original_url)
        logger.error(
            "database.connection_fallback.failed",
            extra={"event": "database.connection_fallback.failed", "error": str(exc)},
        )
        return False

    logger.warning(
        "database.connection_fallback.sqlite",
        extra={
            "event": "database.connection_fallback.sqlite",
            "from_scheme": original_url.split("://", 1)[0],
            "to_scheme": "sqlite",
        },
    )
    return True
