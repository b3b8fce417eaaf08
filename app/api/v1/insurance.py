"""Insurance advice endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, status
from sqlalchemy.orm import Session

from app.api.v1._authz import DOMAIN_ERRORS, authorize_request, load_actor, to_http_error
from app.core.dependencies import get_db_session, get_orchestrator
from app.core.schemas import IntentResult
from app.llm.orchestrator import LLMOrchestrator
from app.schemas.insurance import (
    InsuranceAnswerResponse,
    InsuranceQuestionRequest,
    InsuranceRecommendationResponse,
    InsuranceRecommendRequest,
)
from app.schemas.queries import QueryResponse
from app.services.insurance_service import InsuranceService
from app.services.vehicle_service import VehicleService

router = APIRouter(prefix="/vehicles/{vehicle_id}/insurance", tags=["insurance"])


@router.post("/recommend", response_model=InsuranceRecommendationResponse)
def recommend_plan(
    vehicle_id: str,
    payload: InsuranceRecommendRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
) -> InsuranceRecommendationResponse:
    authorize_request(authorization, ["insurance.read"])
    intent = IntentResult.model_validate(payload.intent.model_dump()) if payload.intent else None
    try:
        vehicle = VehicleService(db=db).resolve(vehicle_id)
        recommendation = InsuranceService(orchestrator).analyze_insurance_needs(intent, vehicle.insurance_options)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    return InsuranceRecommendationResponse(
        recommended_plan_id=recommendation.recommended_plan_id,
        reason=recommendation.reason,
    )


@router.post("/ask", response_model=InsuranceAnswerResponse)
def ask_insurance_agent(
    vehicle_id: str,
    payload: InsuranceQuestionRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
) -> InsuranceAnswerResponse:
    authorize_request(authorization, ["insurance.read"])
    try:
        vehicle = VehicleService(db=db).resolve(vehicle_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    answer = InsuranceService(orchestrator).query_insurance_agent(payload.question, vehicle.insurance_options)
    return InsuranceAnswerResponse(answer=answer)


@router.post("/forward", response_model=QueryResponse, status_code=status.HTTP_201_CREATED)
def forward_to_seller(
    vehicle_id: str,
    payload: InsuranceQuestionRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
) -> QueryResponse:
    """Send an insurance question the agent could not settle to the seller's inbox."""
    current = authorize_request(authorization, ["insurance.read", "queries.send"])
    actor = load_actor(db, current)
    try:
        vehicle = VehicleService(db=db).resolve(vehicle_id)
        query = InsuranceService(orchestrator).forward_to_seller(db, actor, vehicle, payload.question)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    return QueryResponse.model_validate(query)
