"""LLM orchestrator with deterministic guard rails and typed fallbacks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, TypeVar

from pydantic import BaseModel

from app.core.schemas import parse_schema
from app.llm.client import LLMClient, LLMRequest, LLMResponse
from app.llm.prompt_templates.defaults import DEFAULT_PROMPT_REGISTRY
from app.llm.validators.basic import validate_non_empty_output
from app.utils.validators import strip_code_fences

logger = logging.getLogger(__name__)

PromptRenderer = Callable[[dict], str]
Validator = Callable[[str], tuple[bool, str | None]]
ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class LLMResult:
    text: str
    model_name: str
    prompt_hash: str
    latency_ms: int
    validation_status: str
    failure_reason: str | None

    @property
    def ok(self) -> bool:
        return self.validation_status == "ok"


class LLMOrchestrator:
    """Unified generation entrypoint for every AI-backed service."""

    def __init__(
        self,
        client: LLMClient | None = None,
        prompt_registry: dict[str, PromptRenderer] | None = None,
        pre_validators: list[Validator] | None = None,
        post_validators: list[Validator] | None = None,
    ) -> None:
        self.client = client or LLMClient()
        self.prompt_registry = prompt_registry or dict(DEFAULT_PROMPT_REGISTRY)
        self.pre_validators = pre_validators or [validate_non_empty_output]
        self.post_validators = post_validators or [validate_non_empty_output]

    def render(self, prompt_key: str, context: dict) -> str:
        renderer = self.prompt_registry.get(prompt_key)
        if renderer is None:
            raise KeyError(f"Unknown prompt key: {prompt_key}")
        return renderer(context)

    def generate(self, prompt_key: str, context: dict, json_mode: bool = True) -> LLMResult:
        """Generate LLM output with deterministic validation before and after call."""
        prompt = self.render(prompt_key, context)
        for validator in self.pre_validators:
            ok, reason = validator(prompt)
            if not ok:
                return LLMResult(
                    text="",
                    model_name="n/a",
                    prompt_hash="n/a",
                    latency_ms=0,
                    validation_status="failed_pre_validation",
                    failure_reason=reason,
                )

        try:
            response: LLMResponse = self.client.generate(
                LLMRequest(prompt_key=prompt_key, prompt=prompt, json_mode=json_mode)
            )
        except Exception as exc:
            logger.warning(
                "llm.generate.failed",
                extra={"event": "llm.generate.failed", "prompt_key": prompt_key, "error": str(exc)},
            )
            return LLMResult(
                text="",
                model_name="n/a",
                prompt_hash="n/a",
                latency_ms=0,
                validation_status="failed_call",
                failure_reason=str(exc),
            )

        for validator in self.post_validators:
            ok, reason = validator(response.text)
            if not ok:
                return LLMResult(
                    text=response.text,
                    model_name=response.model_name,
                    prompt_hash=response.prompt_hash,
                    latency_ms=response.latency_ms,
                    validation_status="failed_post_validation",
                    failure_reason=reason,
                )

        return LLMResult(
            text=response.text,
            model_name=response.model_name,
            prompt_hash=response.prompt_hash,
            latency_ms=response.latency_ms,
            validation_status="ok",
            failure_reason=None,
        )

    def generate_text(self, prompt_key: str, context: dict, fallback: str) -> str:
        """Plain-text generation; `fallback` replaces any failed or empty output."""
        result = self.generate(prompt_key, context, json_mode=False)
        if not result.ok:
            logger.info(
                "llm.fallback.used",
                extra={"event": "llm.fallback.used", "prompt_key": prompt_key, "reason": result.failure_reason},
            )
            return fallback
        return result.text.strip()

    def generate_structured(self, prompt_key: str, context: dict, model_cls: type[ModelT], fallback: ModelT) -> ModelT:
        """JSON generation validated against `model_cls`; `fallback` replaces anything malformed."""
        result = self.generate(prompt_key, context, json_mode=True)
        if not result.ok:
            logger.info(
                "llm.fallback.used",
                extra={"event": "llm.fallback.used", "prompt_key": prompt_key, "reason": result.failure_reason},
            )
            return fallback
        try:
            return parse_schema(model_cls, strip_code_fences(result.text))
        except (ValueError, OverflowError) as exc:
            logger.warning(
                "llm.schema.invalid",
                extra={"event": "llm.schema.invalid", "prompt_key": prompt_key, "error": str(exc)[:500]},
            )
            return fallback

    def generate_image(self, prompt: str, reference_image_b64: str | None = None) -> str | None:
        try:
            return self.client.generate_image(prompt, reference_image_b64=reference_image_b64)
        except Exception as exc:
            logger.warning("llm.image.failed", extra={"event": "llm.image.failed", "error": str(exc)})
            return None
