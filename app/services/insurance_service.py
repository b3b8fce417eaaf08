"""Insurance advice for a vehicle's plans."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.core.exceptions import ValidationError
from app.core.schemas import FALLBACK_INTENT, InsuranceRecommendation, IntentResult
from app.llm.orchestrator import LLMOrchestrator
from app.models import User, UserQuery, Vehicle
from app.services.query_service import INSURANCE_QUERY_TAG, QueryService

logger = logging.getLogger(__name__)

DEFAULT_RECOMMENDATION_REASON = "Best general coverage."
AGENT_UNAVAILABLE = "Service unavailable."


class InsuranceService:
    def __init__(self, orchestrator: LLMOrchestrator | None = None) -> None:
        self.orchestrator = orchestrator or LLMOrchestrator()

    def analyze_insurance_needs(self, intent: IntentResult | None, plans: list[dict]) -> InsuranceRecommendation:
        """
        Pick one plan for the buyer's intent.

        An unknown plan id from the model is replaced by the first plan, so the
        recommendation always points at a plan the vehicle offers.
        """
        if not plans:
            raise ValidationError("This vehicle has no insurance plans.")

        first_plan_id = str(plans[0].get("id", ""))
        fallback = InsuranceRecommendation(recommended_plan_id=first_plan_id, reason=DEFAULT_RECOMMENDATION_REASON)
        recommendation = self.orchestrator.generate_structured(
            "insurance.recommend",
            {"intent": (intent or FALLBACK_INTENT).model_dump(), "plans": plans},
            InsuranceRecommendation,
            fallback,
        )
        known_ids = {str(plan.get("id")) for plan in plans}
        if recommendation.recommended_plan_id not in known_ids:
            logger.info(
                "insurance.recommendation.unknown_plan",
                extra={"event": "insurance.recommendation.unknown_plan", "plan_id": recommendation.recommended_plan_id},
            )
            recommendation = recommendation.model_copy(update={"recommended_plan_id": first_plan_id})
        if not recommendation.reason:
            recommendation = recommendation.model_copy(update={"reason": DEFAULT_RECOMMENDATION_REASON})
        return recommendation

    def query_insurance_agent(self, question: str, plans: list[dict]) -> str:
        return self.orchestrator.generate_text(
            "insurance.agent",
            {"question": question, "plans": plans},
            fallback=AGENT_UNAVAILABLE,
        )

    def forward_to_seller(self, db: Session, buyer: User, vehicle: Vehicle, question: str) -> UserQuery:
        return QueryService(db=db).send(buyer, vehicle, question, tag=INSURANCE_QUERY_TAG)
