"""Deterministic validators and sanitizers used across services and API."""

from __future__ import annotations

import html
import re

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
_TAG_PATTERN = re.compile(r"<[^>]+>")
_FENCE_PATTERN = re.compile(r"```(?:html|json)?", re.IGNORECASE)

MIN_PASSWORD_LENGTH = 6
MIN_DEALERSHIP_NAME_LENGTH = 4


def sanitize_text(value: str | None, max_len: int = 20000) -> str:
    """Sanitize free-form content before persistence/display."""
    if value is None:
        return ""
    cleaned = str(value).replace("\x00", "").strip()
    cleaned = cleaned[:max_len]
    return cleaned


def sanitize_llm_output(value: str | None, max_len: int = 20000) -> str:
    """Escape LLM output before rendering in web surfaces."""
    return html.escape(sanitize_text(value, max_len=max_len))


def strip_code_fences(value: str | None) -> str:
    """Remove markdown code fences a model may wrap HTML in."""
    if not value:
        return ""
    return _FENCE_PATTERN.sub("", value).strip()


def strip_markup(value: str | None) -> str:
    """Replace HTML tags with spaces, for prompts that need plain text."""
    if not value:
        return ""
    return _TAG_PATTERN.sub(" ", value)


def is_valid_email(email: str | None) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email.strip()) is not None


def registration_errors(email: str, password: str, role: str, dealership_name: str | None) -> list[str]:
    """
    Deterministic registration checks.
    No LLM calls. Returns every failed rule, empty when valid.
    """
    errors: list[str] = []
    if not is_valid_email(email):
        errors.append("The email address provided is invalid.")
    if len(password or "") < MIN_PASSWORD_LENGTH:
        errors.append(f"The password is too weak. Please use at least {MIN_PASSWORD_LENGTH} characters.")
    if role == "seller" and len(sanitize_text(dealership_name)) < MIN_DEALERSHIP_NAME_LENGTH:
        errors.append("Dealership name must be longer than 3 characters.")
    return errors
