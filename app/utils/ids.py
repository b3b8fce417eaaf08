"""Identifier generation helpers."""

from __future__ import annotations

import uuid


def new_id() -> str:
    """Create an opaque UUID4-based record identifier."""
    return uuid.uuid4().hex


def new_plan_id() -> str:
    """Create an identifier for an embedded insurance plan."""
    return f"plan-{uuid.uuid4().hex[:12]}"
