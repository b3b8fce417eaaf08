"""JSON-lines logging for the API process and maintenance commands."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from app.core.config import Config, get_config

# Attributes every LogRecord carries; anything else arrived through `extra=`.
_RESERVED_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}
_QUIET_IN_PRODUCTION = ("sqlalchemy.engine", "urllib3", "alembic.runtime.migration", "uvicorn.access")


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with `extra=` fields lifted to the top level."""

    def __init__(self, service: str) -> None:
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "service": self.service,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, value) for key, value in vars(record).items() if key not in _RESERVED_ATTRS and key not in entry
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=True, default=str)


def configure_logging(config: Config | None = None) -> None:
    """Attach stdout (and optional file) handlers to the root logger; no-op once configured."""
    config = config or get_config()
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(config.LOG_LEVEL)
    formatter = JsonFormatter(service=config.APP_NAME)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if config.LOG_FILE:
        handlers.append(logging.FileHandler(config.LOG_FILE))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    if config.is_production:
        for name in _QUIET_IN_PRODUCTION:
            logging.getLogger(name).setLevel(logging.WARNING)
