"""Vehicle visualizer endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, status
from sqlalchemy.orm import Session

from app.api.v1._authz import DOMAIN_ERRORS, authorize_request, load_actor, to_http_error
from app.core.dependencies import get_db_session, get_orchestrator
from app.llm.orchestrator import LLMOrchestrator
from app.schemas.visuals import SavedVisualResponse, VisualGenerateRequest, VisualGenerateResponse, VisualSaveRequest
from app.services.vehicle_service import VehicleService
from app.services.visualizer_service import VisualizerService

router = APIRouter(prefix="/visuals", tags=["visuals"])


@router.post("/generate", response_model=VisualGenerateResponse)
def generate_visuals(
    payload: VisualGenerateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
) -> VisualGenerateResponse:
    authorize_request(authorization, ["visuals.generate"])
    try:
        vehicle = VehicleService(db=db).resolve(payload.vehicle_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    images = VisualizerService(db=db, orchestrator=orchestrator).generate_vehicle_visuals(
        vehicle,
        payload.context,
        modification=payload.modification,
        reference_image_b64=payload.reference_image_b64,
    )
    return VisualGenerateResponse(images=images)


@router.get("", response_model=list[SavedVisualResponse])
def list_saved_visuals(
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> list[SavedVisualResponse]:
    current = authorize_request(authorization, ["visuals.read"])
    visuals = VisualizerService(db=db).list_for_buyer(current.user_id)
    return [SavedVisualResponse.model_validate(visual) for visual in visuals]


@router.post("", response_model=SavedVisualResponse, status_code=status.HTTP_201_CREATED)
def save_visual(
    payload: VisualSaveRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> SavedVisualResponse:
    current = authorize_request(authorization, ["visuals.write"])
    actor = load_actor(db, current)
    try:
        vehicle = VehicleService(db=db).resolve(payload.vehicle_id)
        visual = VisualizerService(db=db).save(actor, vehicle, payload.image_url, prompt=payload.prompt)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    return SavedVisualResponse.model_validate(visual)


@router.delete("/{visual_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_visual(
    visual_id: str,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> None:
    current = authorize_request(authorization, ["visuals.write"])
    actor = load_actor(db, current)
    try:
        VisualizerService(db=db).delete(visual_id, actor)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
