"""Session tokens for marketplace accounts, signed with HS256."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from app.core.config import Config, get_config
from app.core.exceptions import AuthenticationError

ACCESS = "access"
REFRESH = "refresh"


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


def _segment(raw: dict[str, Any]) -> str:
    encoded = json.dumps(raw, separators=(",", ":"), sort_keys=True).encode("utf-8")
    return base64.urlsafe_b64encode(encoded).decode("ascii").rstrip("=")


def _unsegment(segment: str) -> dict[str, Any]:
    padded = segment + "=" * (-len(segment) % 4)
    return json.loads(base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8"))


def _signature(signing_input: str, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), signing_input.encode("utf-8"), hashlib.sha256).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")


def encode_jwt(payload: dict[str, Any], secret: str, ttl: timedelta) -> str:
    """Sign `payload`, adding iat/exp/jti unless already present."""
    if not secret:
        raise AuthenticationError("JWT secret must be configured.")

    issued = datetime.now(timezone.utc)
    claims = {
        "iat": int(issued.timestamp()),
        "exp": int((issued + ttl).timestamp()),
        "jti": uuid.uuid4().hex,
        **payload,
    }
    signing_input = f"{_segment({'alg': 'HS256', 'typ': 'JWT'})}.{_segment(claims)}"
    return f"{signing_input}.{_signature(signing_input, secret)}"


def decode_jwt(token: str, secret: str, verify_exp: bool = True) -> dict[str, Any]:
    if not secret:
        raise AuthenticationError("JWT secret must be configured.")
    parts = token.split(".")
    if len(parts) != 3:
        raise AuthenticationError("Invalid token format.")

    header_segment, payload_segment, signature_segment = parts
    if not hmac.compare_digest(_signature(f"{header_segment}.{payload_segment}", secret), signature_segment):
        raise AuthenticationError("Invalid token signature.")
    try:
        claims = _unsegment(payload_segment)
    except ValueError as exc:
        raise AuthenticationError("Invalid token payload.") from exc

    if verify_exp:
        if "exp" not in claims:
            raise AuthenticationError("Token is missing exp claim.")
        if int(claims["exp"]) < int(datetime.now(timezone.utc).timestamp()):
            raise AuthenticationError("Token has expired.")
    return claims


def issue_session_tokens(user_id: str, role: str, cfg: Config | None = None) -> TokenPair:
    """Access + refresh tokens for one account, with lifetimes taken from config."""
    cfg = cfg or get_config()
    base_claims = {"sub": str(user_id), "role": role, "permissions_version": cfg.JWT_PERMISSIONS_VERSION}
    return TokenPair(
        access_token=encode_jwt(
            {**base_claims, "token_use": ACCESS},
            secret=cfg.JWT_SECRET,
            ttl=timedelta(minutes=cfg.JWT_ACCESS_TTL_MINUTES),
        ),
        refresh_token=encode_jwt(
            {**base_claims, "token_use": REFRESH},
            secret=cfg.JWT_SECRET,
            ttl=timedelta(days=cfg.JWT_REFRESH_TTL_DAYS),
        ),
    )


def verify_session_token(token: str, token_use: str, cfg: Config | None = None) -> dict[str, Any]:
    """Decode a session token and check it is the expected kind and permission generation."""
    cfg = cfg or get_config()
    claims = decode_jwt(token, secret=cfg.JWT_SECRET)
    if claims.get("token_use") != token_use:
        raise AuthenticationError(f"Token is not a valid {token_use} token.")
    if int(claims.get("permissions_version", 0)) != cfg.JWT_PERMISSIONS_VERSION:
        raise AuthenticationError("Token permissions are outdated.")
    return claims
