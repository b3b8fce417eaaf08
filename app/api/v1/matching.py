"""Vehicle matching endpoint for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header
from sqlalchemy.orm import Session

from app.api.v1._authz import authorize_request
from app.core.dependencies import get_db_session, get_orchestrator
from app.llm.orchestrator import LLMOrchestrator
from app.schemas.matching import IntentResponse, MatchRequest, MatchResponse, ScoredVehicleResponse
from app.schemas.vehicles import VehicleResponse
from app.services.matching_service import MatchAnswers, MatchingService

router = APIRouter(tags=["matching"])


@router.post("/match", response_model=MatchResponse)
def match_vehicles(
    payload: MatchRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
) -> MatchResponse:
    authorize_request(authorization, ["match.run"])
    answers = MatchAnswers(
        people=payload.people,
        terrain=payload.terrain,
        primary_use=payload.primary_use,
        budget=payload.budget,
    )
    outcome = MatchingService(db=db, orchestrator=orchestrator).match(answers)
    return MatchResponse(
        intent=IntentResponse(**outcome.intent.model_dump()),
        vehicles=[
            ScoredVehicleResponse(
                vehicle=VehicleResponse.model_validate(item.vehicle),
                score=item.score,
                breakdown=item.breakdown,
            )
            for item in outcome.vehicles
        ],
        fallback_used=outcome.fallback_used,
    )
