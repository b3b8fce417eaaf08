"""Apply schema migrations and seed the reference catalog.

Run with ``python -m app.database.init_db``. The API process itself only calls
``create_all`` on startup; this module is the path for managed databases.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path

from alembic import command
from alembic.config import Config as AlembicConfig
from sqlalchemy import inspect

import app.database.db as db_module
from app.core.logging_config import configure_logging
from app.database.seed import seed_catalog
from app.models import Base

PROJECT_ROOT = Path(__file__).resolve().parents[2]
BASELINE_REVISION = "20261019_0001"
CORE_TABLES = {"users", "vehicles", "contracts", "queries"}

logger = logging.getLogger(__name__)


def build_alembic_config(database_url: str) -> AlembicConfig:
    cfg = AlembicConfig(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    cfg.set_main_option("sqlalchemy.url", database_url)
    cfg.attributes["configure_logger"] = False
    return cfg


def requires_baseline_stamp() -> bool:
    """True when tables were created by ``create_all`` without alembic tracking them."""
    table_names = set(inspect(db_module.get_engine()).get_table_names())
    return CORE_TABLES.issubset(table_names) and "alembic_version" not in table_names


def _sqlite_db_path(database_url: str) -> Path | None:
    prefix = "sqlite:///"
    if not database_url.startswith(prefix):
        return None
    raw = database_url[len(prefix) :]
    if raw in {":memory:", ""}:
        return None
    path = Path(raw)
    if not path.is_absolute():
        path = (PROJECT_ROOT / path).resolve()
    return path


def _reset_sqlite_db(database_url: str) -> Path | None:
    db_path = _sqlite_db_path(database_url)
    if not db_path or not db_path.exists():
        db_module.reset_engine(database_url)
        return None

    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_name(f"{db_path.stem}.backup_{timestamp}{db_path.suffix}")
    db_module.get_engine().dispose()
    db_path.replace(backup_path)
    db_module.reset_engine(database_url)
    return backup_path


def upgrade_schema(database_url: str) -> None:
    alembic_cfg = build_alembic_config(database_url)
    if requires_baseline_stamp():
        command.stamp(alembic_cfg, BASELINE_REVISION)
        logger.info(
            "database.schema.stamped",
            extra={"event": "database.schema.stamped", "revision": BASELINE_REVISION},
        )
    command.upgrade(alembic_cfg, "head")


def init_db() -> int:
    """Migrate to head, then insert any missing catalog vehicles. Returns the number seeded."""
    active_url = db_module.get_active_database_url()
    try:
        upgrade_schema(active_url)
    except Exception as exc:
        if not active_url.startswith("sqlite:///"):
            raise
        backup_path = _reset_sqlite_db(active_url)
        logger.warning(
            "database.sqlite.reset_for_schema_mismatch",
            extra={
                "event": "database.sqlite.reset_for_schema_mismatch",
                "database_url": active_url,
                "backup_path": str(backup_path) if backup_path else None,
                "reason": str(exc),
            },
        )
        upgrade_schema(active_url)

    Base.metadata.create_all(bind=db_module.get_engine())
    with db_module.session_scope() as db:
        seeded = seed_catalog(db)
    logger.info(
        "database.initialized",
        extra={"event": "database.initialized", "database_url": active_url, "seeded": seeded},
    )
    return seeded


if __name__ == "__main__":
    configure_logging()
    init_db()
