"""Role-based authorization helpers."""

from __future__ import annotations

from app.core.exceptions import AuthorizationError

# Scope strings are kept explicit for endpoint-level declarations.
ROLE_SCOPES: dict[str, set[str]] = {
    "admin": {
        "*",
    },
    "seller": {
        "profile.read",
        "profile.write",
        "buyers.read",
        "vehicles.read",
        "vehicles.write",
        "contracts.read",
        "contracts.revise",
        "templates.write",
        "queries.read",
        "queries.reply",
        "queries.delete",
        "insurance.read",
        "analytics.read",
    },
    "buyer": {
        "profile.read",
        "profile.write",
        "vehicles.read",
        "match.run",
        "contracts.read",
        "contracts.draft",
        "contracts.review",
        "contracts.sign",
        "contracts.delete",
        "queries.send",
        "queries.read",
        "queries.delete",
        "visuals.generate",
        "visuals.read",
        "visuals.write",
        "insurance.read",
        "activity.read",
    },
}


def get_scopes_for_role(role: str) -> set[str]:
    """Return scopes granted to a role."""
    return ROLE_SCOPES.get(role.lower(), set())


def has_scopes(role: str, required_scopes: list[str] | set[str] | tuple[str, ...]) -> bool:
    """Check if role includes every required scope."""
    granted = get_scopes_for_role(role)
    if "*" in granted:
        return True
    return set(required_scopes).issubset(granted)


def require_scopes(role: str, required_scopes: list[str] | set[str] | tuple[str, ...]) -> None:
    """Raise when a role lacks required scopes."""
    if has_scopes(role=role, required_scopes=required_scopes):
        return
    missing = sorted(set(required_scopes) - get_scopes_for_role(role))
    raise AuthorizationError(f"Missing required scopes: {', '.join(missing)}")
