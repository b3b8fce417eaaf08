"""Buyer intent classification."""

from __future__ import annotations

import logging

from app.core.schemas import FALLBACK_INTENT, IntentResult
from app.llm.orchestrator import LLMOrchestrator
from app.utils.validators import sanitize_text

logger = logging.getLogger(__name__)


class IntentService:
    def __init__(self, orchestrator: LLMOrchestrator | None = None) -> None:
        self.orchestrator = orchestrator or LLMOrchestrator()

    def analyze_intent(self, user_input: str) -> IntentResult:
        """Classify free text into an intent; any failure yields the default intent."""
        intent = self.orchestrator.generate_structured(
            "intent.classify",
            {"user_input": sanitize_text(user_input, max_len=4000)},
            IntentResult,
            FALLBACK_INTENT.model_copy(deep=True),
        )
        logger.info(
            "intent.classified",
            extra={
                "event": "intent.classified",
                "category": intent.category,
                "budget": intent.detected_budget,
                "min_seats": intent.min_seats,
            },
        )
        return intent
