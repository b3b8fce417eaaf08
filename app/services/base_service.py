"""Shared service base with session lifecycle and lookup helpers."""

from __future__ import annotations

from typing import TypeVar

from sqlalchemy.orm import Session

from app.core.exceptions import DatabaseError, NotFoundError
from app.database import db as database

ModelT = TypeVar("ModelT")


class BaseService:
    """Base class for services that operate on a SQLAlchemy session."""

    def __init__(self, db: Session | None = None) -> None:
        self.db = db or database.SessionLocal()

    def commit(self) -> None:
        """Commit current transaction and rollback on failure."""
        try:
            self.db.commit()
        except Exception as exc:
            self.db.rollback()
            raise DatabaseError(f"Database write failed: {exc}") from exc

    def rollback(self) -> None:
        self.db.rollback()

    def close(self) -> None:
        self.db.close()

    def get_or_raise(self, model: type[ModelT], record_id: str, label: str | None = None) -> ModelT:
        record = self.db.get(model, record_id)
        if record is None:
            raise NotFoundError(f"{label or model.__name__} not found: {record_id}")
        return record

    def __enter__(self) -> "BaseService":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type:
            self.rollback()
        self.close()
