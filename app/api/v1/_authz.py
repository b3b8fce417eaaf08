"""Shared authorization and error-mapping helpers for API v1 route modules."""

from __future__ import annotations

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.auth.rbac import require_scopes
from app.core.config import get_config
from app.core.dependencies import CurrentUser, get_current_user
from app.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ComplianceWarning,
    ConflictError,
    DatabaseError,
    NotFoundError,
    TeckionException,
    ValidationError,
)
from app.models import User, UserRole
from app.orchestration.state_machine import InvalidTransitionError

DOMAIN_ERRORS = (TeckionException, InvalidTransitionError)


def _extract_bearer_token(authorization: str | None) -> str:
    if authorization is None or not authorization.strip():
        raise AuthenticationError("Authorization header is required.")
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthenticationError("Authorization header must use Bearer token.")
    return parts[1].strip()


def authorize(authorization: str | None, scopes: list[str]) -> CurrentUser:
    token = _extract_bearer_token(authorization)
    user = get_current_user(token=token, settings=get_config())
    require_scopes(user.role, scopes)
    return user


def map_auth_error(exc: Exception) -> tuple[int, str]:
    if isinstance(exc, AuthenticationError):
        return 401, str(exc)
    if isinstance(exc, AuthorizationError):
        return 403, str(exc)
    return 401, "Unauthorized."


def authorize_request(authorization: str | None, scopes: list[str]) -> CurrentUser:
    try:
        return authorize(authorization=authorization, scopes=scopes)
    except Exception as exc:
        code, detail = map_auth_error(exc)
        raise HTTPException(status_code=code, detail=detail) from exc


def load_actor(db: Session, current: CurrentUser) -> User:
    """Stored account behind a token; a deleted account invalidates its tokens."""
    user = db.get(User, current.user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account no longer exists.")
    return user


def ensure_party(actor: User, *owner_ids: str) -> None:
    if actor.role == UserRole.ADMIN or actor.id in owner_ids:
        return
    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not a party to this record.")


def to_http_error(exc: Exception) -> HTTPException:
    """Translate a domain exception into the HTTP error surfaced to the caller."""
    if isinstance(exc, ComplianceWarning):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"code": "compliance_warning", "reason": exc.reason, "confirm_required": True},
        )
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, (ConflictError, InvalidTransitionError)):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, (AuthenticationError, AuthorizationError)):
        code, detail = map_auth_error(exc)
        return HTTPException(status_code=code, detail=detail)
    if isinstance(exc, DatabaseError):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Storage is unavailable.")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
