"""Request/response types for text generation and the default Gemini-backed client."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import hashlib
import logging
from time import perf_counter

from app.core.config import get_config
from app.services.llm_client import call_image_model, call_llm

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LLMRequest:
    prompt_key: str
    prompt: str
    json_mode: bool = True


@dataclass(frozen=True)
class LLMResponse:
    text: str
    model_name: str
    prompt_hash: str
    latency_ms: int
    generated_at: str


def prompt_fingerprint(prompt: str) -> str:
    return hashlib.sha256(prompt.encode("utf-8")).hexdigest()


class LLMClient:
    """Calls the configured text and image models; an unset API key yields empty output."""

    def generate(self, request: LLMRequest) -> LLMResponse:
        started = perf_counter()
        text = call_llm(prompt=request.prompt, json_mode=request.json_mode)
        response = LLMResponse(
            text=text,
            model_name=get_config().LLM_MODEL,
            prompt_hash=prompt_fingerprint(request.prompt),
            latency_ms=int((perf_counter() - started) * 1000),
            generated_at=datetime.now(timezone.utc).isoformat(),
        )
        logger.debug(
            "llm.call.completed",
            extra={
                "event": "llm.call.completed",
                "prompt_key": request.prompt_key,
                "model": response.model_name,
                "latency_ms": response.latency_ms,
                "empty": not text,
            },
        )
        return response

    def generate_image(self, prompt: str, reference_image_b64: str | None = None) -> str | None:
        """Data URL of the rendered image, or None when the model returned no image."""
        return call_image_model(prompt=prompt, reference_image_b64=reference_image_b64)
