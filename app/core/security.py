"""Security primitives for password workflows."""

from __future__ import annotations

import hashlib
import hmac
import secrets

_ALGORITHM = "pbkdf2_sha256"
_ITERATIONS = 120_000


def _derive(password: str, salt: str, iterations: int, pepper: str) -> str:
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        f"{pepper}:{password}".encode("utf-8"),
        salt.encode("utf-8"),
        iterations,
    )
    return digest.hex()


def hash_password(password: str, pepper: str = "") -> str:
    """Return a salted PBKDF2 hash encoded as `algorithm$iterations$salt$digest`."""
    salt = secrets.token_hex(16)
    digest = _derive(password, salt, _ITERATIONS, pepper)
    return f"{_ALGORITHM}${_ITERATIONS}${salt}${digest}"


def verify_password(password: str, hashed_password: str, pepper: str = "") -> bool:
    """Constant-time comparison against a stored hash."""
    try:
        algorithm, iterations, salt, expected = hashed_password.split("$", 3)
        rounds = int(iterations)
    except ValueError:
        return False
    if algorithm != _ALGORITHM:
        return False
    candidate = _derive(password, salt, rounds, pepper)
    return hmac.compare_digest(candidate, expected)
