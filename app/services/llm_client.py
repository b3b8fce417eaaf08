"""HTTP access to the Gemini `generateContent` endpoint."""

from __future__ import annotations

import logging
import threading
import time
from typing import Any

import requests

from app.core.config import get_config

logger = logging.getLogger(__name__)
_RATE_LOCK = threading.Lock()
_LAST_REQUEST_TS = 0.0


def _apply_rate_limit(min_interval_seconds: float) -> None:
    global _LAST_REQUEST_TS
    if min_interval_seconds <= 0:
        return

    with _RATE_LOCK:
        now = time.monotonic()
        elapsed = now - _LAST_REQUEST_TS
        if elapsed < min_interval_seconds:
            time.sleep(min_interval_seconds - elapsed)
        _LAST_REQUEST_TS = time.monotonic()


def _post_generate(model: str, body: dict[str, Any]) -> dict[str, Any] | None:
    """POST a generateContent request; returns the decoded body or None on failure."""
    config = get_config()
    if not config.GEMINI_API_KEY:
        logger.warning("llm.call.no_api_key", extra={"event": "llm.call.no_api_key", "model": model})
        return None

    url = f"{config.GEMINI_API_URL.rstrip('/')}/{model}:generateContent"
    total_attempts = config.LLM_MAX_RETRIES + 1
    last_error: Exception | None = None

    for attempt in range(1, total_attempts + 1):
        try:
            _apply_rate_limit(config.LLM_MIN_INTERVAL_SECONDS)
            response = requests.post(
                url,
                params={"key": config.GEMINI_API_KEY},
                json=body,
                timeout=(5, config.LLM_TIMEOUT_SECONDS),
            )
            response.raise_for_status()
            return response.json()
        except (requests.exceptions.RequestException, ValueError) as exc:
            last_error = exc
            logger.warning(
                "llm.call.failed",
                extra={
                    "event": "llm.call.failed",
                    "model": model,
                    "attempt": attempt,
                    "attempts_total": total_attempts,
                    "error": str(exc),
                },
            )
            if attempt < total_attempts:
                time.sleep(min(2 * attempt, 5))

    logger.error(
        "llm.call.unavailable",
        extra={
            "event": "llm.call.unavailable",
            "model": model,
            "error": str(last_error) if last_error else "unknown",
        },
    )
    return None


def _candidate_parts(body: dict[str, Any] | None) -> list[dict[str, Any]]:
    if not body:
        return []
    candidates = body.get("candidates") or []
    if not candidates:
        return []
    content = candidates[0].get("content") or {}
    return [part for part in content.get("parts") or [] if isinstance(part, dict)]


def call_llm(prompt: str, json_mode: bool = False, model: str | None = None) -> str:
    """Return the model's text for `prompt`, or an empty string when unavailable."""
    config = get_config()
    generation_config: dict[str, Any] = {"temperature": config.LLM_TEMPERATURE}
    if json_mode:
        generation_config["responseMimeType"] = "application/json"

    body = {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": generation_config,
    }
    parts = _candidate_parts(_post_generate(model or config.LLM_MODEL, body))
    return "".join(str(part.get("text", "")) for part in parts)


def call_image_model(prompt: str, reference_image_b64: str | None = None) -> str | None:
    """Return a `data:` URL for the first generated image, or None."""
    config = get_config()
    parts: list[dict[str, Any]] = [{"text": prompt}]
    if reference_image_b64:
        parts.insert(0, {"inlineData": {"mimeType": "image/jpeg", "data": reference_image_b64}})

    body = {"contents": [{"role": "user", "parts": parts}]}
    for part in _candidate_parts(_post_generate(config.LLM_IMAGE_MODEL, body)):
        inline = part.get("inlineData")
        if inline and inline.get("data"):
            mime_type = inline.get("mimeType") or "image/png"
            return f"data:{mime_type};base64,{inline['data']}"
    return None
