"""Dependency providers for API handlers."""

from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from app.auth.jwt import ACCESS, verify_session_token
from app.core.config import Config, get_config
from app.core.exceptions import AuthenticationError
from app.database.db import get_db
from app.llm.orchestrator import LLMOrchestrator
from app.services.signature_service import SignatureService, SimulatedSignatureService


@dataclass(frozen=True)
class CurrentUser:
    user_id: str
    role: str
    permissions_version: int
    claims: dict[str, Any]


def get_settings() -> Config:
    """Return validated application configuration."""
    return get_config()


def get_db_session() -> Generator[Session, None, None]:
    """Yield SQLAlchemy session for dependency injection."""
    yield from get_db()


def get_current_user(token: str, settings: Config | None = None) -> CurrentUser:
    """Resolve current user from an access token."""
    claims = verify_session_token(token, ACCESS, settings or get_settings())
    try:
        return CurrentUser(
            user_id=str(claims["sub"]),
            role=str(claims["role"]).lower(),
            permissions_version=int(claims.get("permissions_version", 1)),
            claims=claims,
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthenticationError("Invalid auth claims.") from exc


def get_orchestrator() -> LLMOrchestrator:
    """Create orchestrator instance for request scope."""
    return LLMOrchestrator()


def get_signature_service() -> SignatureService:
    return SimulatedSignatureService()
