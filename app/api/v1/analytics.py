"""Seller analytics and buyer activity endpoints for API v1."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, Header, Query
from sqlalchemy.orm import Session

from app.api.v1._authz import authorize_request, load_actor
from app.core.dependencies import get_db_session, get_orchestrator
from app.llm.orchestrator import LLMOrchestrator
from app.models import ContractStatus, QueryStatus
from app.schemas.analytics import (
    ActivityResponse,
    ChatbotRequest,
    ChatbotResponse,
    DashboardResponse,
    NotificationResponse,
)
from app.schemas.contracts import ContractResponse
from app.schemas.queries import QueryResponse
from app.schemas.visuals import SavedVisualResponse
from app.services.activity_service import ActivityService
from app.services.analytics_service import AnalyticsService

router = APIRouter(tags=["analytics"])


@router.get("/analytics/dashboard", response_model=DashboardResponse)
def seller_dashboard(
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> DashboardResponse:
    current = authorize_request(authorization, ["analytics.read"])
    metrics = AnalyticsService(db=db).dashboard(current.user_id)
    return DashboardResponse(**asdict(metrics))


@router.post("/analytics/chat", response_model=ChatbotResponse)
def analytics_chat(
    payload: ChatbotRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
) -> ChatbotResponse:
    current = authorize_request(authorization, ["analytics.read"])
    answer = AnalyticsService(db=db, orchestrator=orchestrator).query_analytics_chatbot(
        payload.question, current.user_id
    )
    return ChatbotResponse(answer=answer)


@router.get("/activity", response_model=ActivityResponse)
def buyer_activity(
    contract_status: ContractStatus | None = Query(default=None),
    query_status: QueryStatus | None = Query(default=None),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> ActivityResponse:
    """Contracts, queries, saved visuals and notifications for the signed-in buyer."""
    current = authorize_request(authorization, ["activity.read"])
    actor = load_actor(db, current)
    activity = ActivityService(db=db).for_buyer(actor.id, contract_status, query_status)
    return ActivityResponse(
        contracts=[ContractResponse.model_validate(contract) for contract in activity.contracts],
        queries=[QueryResponse.model_validate(query) for query in activity.queries],
        saved_visuals=[SavedVisualResponse.model_validate(visual) for visual in activity.saved_visuals],
        notifications=[NotificationResponse(**asdict(note)) for note in activity.notifications],
    )
