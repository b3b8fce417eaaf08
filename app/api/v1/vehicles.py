"""Vehicle inventory and seller template endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Query, status
from sqlalchemy.orm import Session

from app.api.v1._authz import DOMAIN_ERRORS, authorize_request, load_actor, to_http_error
from app.core.dependencies import get_db_session, get_orchestrator
from app.llm.orchestrator import LLMOrchestrator
from app.models import DriveType
from app.schemas.vehicles import (
    DriveLiteral,
    InsurancePlanSchema,
    SeedResponse,
    SellerPlaceholdersResponse,
    TemplateFillRequest,
    TemplateGenerateRequest,
    TemplateRefineRequest,
    TemplateRequest,
    TemplateTextResponse,
    VehicleCreateRequest,
    VehicleResponse,
    VehicleUpdateRequest,
)
from app.services.contract_ai_service import ContractAIService, prefill_seller_fields
from app.services.vehicle_service import VehicleService

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


@router.get("", response_model=list[VehicleResponse])
def list_vehicles(
    drive: DriveLiteral | None = Query(default=None),
    mine: bool = Query(default=False),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> list[VehicleResponse]:
    current = authorize_request(authorization, ["vehicles.read"])
    service = VehicleService(db=db)
    if drive is None and not mine:
        vehicles = service.inventory()
    else:
        vehicles = service.list_vehicles(
            drive=DriveType(drive) if drive else None,
            seller_id=current.user_id if mine else None,
        )
    return [VehicleResponse.model_validate(vehicle) for vehicle in vehicles]


@router.get("/{vehicle_id}", response_model=VehicleResponse)
def get_vehicle(
    vehicle_id: str,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> VehicleResponse:
    authorize_request(authorization, ["vehicles.read"])
    try:
        vehicle = VehicleService(db=db).resolve(vehicle_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    return VehicleResponse.model_validate(vehicle)


@router.post("", response_model=VehicleResponse, status_code=status.HTTP_201_CREATED)
def create_vehicle(
    payload: VehicleCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> VehicleResponse:
    current = authorize_request(authorization, ["vehicles.write"])
    load_actor(db, current)
    try:
        vehicle = VehicleService(db=db).create(current.user_id, payload.model_dump())
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    return VehicleResponse.model_validate(vehicle)


@router.patch("/{vehicle_id}", response_model=VehicleResponse)
def update_vehicle(
    vehicle_id: str,
    payload: VehicleUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> VehicleResponse:
    current = authorize_request(authorization, ["vehicles.write"])
    actor = load_actor(db, current)
    try:
        vehicle = VehicleService(db=db).update(vehicle_id, actor.id, actor.role, payload.model_dump(exclude_none=True))
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    return VehicleResponse.model_validate(vehicle)


@router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_vehicle(
    vehicle_id: str,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> None:
    current = authorize_request(authorization, ["vehicles.write"])
    actor = load_actor(db, current)
    try:
        VehicleService(db=db).delete(vehicle_id, actor.id, actor.role)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc


@router.post("/{vehicle_id}/insurance", response_model=VehicleResponse, status_code=status.HTTP_201_CREATED)
def add_insurance_plan(
    vehicle_id: str,
    payload: InsurancePlanSchema,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> VehicleResponse:
    current = authorize_request(authorization, ["vehicles.write"])
    actor = load_actor(db, current)
    try:
        vehicle = VehicleService(db=db).add_insurance_plan(vehicle_id, actor.id, actor.role, payload.model_dump())
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    return VehicleResponse.model_validate(vehicle)


@router.delete("/{vehicle_id}/insurance/{plan_id}", response_model=VehicleResponse)
def remove_insurance_plan(
    vehicle_id: str,
    plan_id: str,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> VehicleResponse:
    current = authorize_request(authorization, ["vehicles.write"])
    actor = load_actor(db, current)
    try:
        vehicle = VehicleService(db=db).remove_insurance_plan(vehicle_id, actor.id, actor.role, plan_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    return VehicleResponse.model_validate(vehicle)


@router.post("/seed", response_model=SeedResponse)
def seed_catalog(
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> SeedResponse:
    authorize_request(authorization, ["catalog.seed"])
    return SeedResponse(created=VehicleService(db=db).seed())


@router.post("/{vehicle_id}/template", response_model=TemplateTextResponse)
def generate_template(
    vehicle_id: str,
    payload: TemplateGenerateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
) -> TemplateTextResponse:
    current = authorize_request(authorization, ["templates.write"])
    actor = load_actor(db, current)
    try:
        vehicle = VehicleService(db=db).resolve(vehicle_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    template = ContractAIService(orchestrator).generate_seller_contract_template(
        vehicle, actor.dealership_name, payload.region
    )
    return TemplateTextResponse(template=template)


@router.post("/{vehicle_id}/template/placeholders", response_model=SellerPlaceholdersResponse)
def seller_placeholders(
    vehicle_id: str,
    payload: TemplateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
) -> SellerPlaceholdersResponse:
    authorize_request(authorization, ["templates.write"])
    try:
        vehicle = VehicleService(db=db).resolve(vehicle_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    fields = ContractAIService(orchestrator).identify_seller_placeholders(payload.template)
    return SellerPlaceholdersResponse(seller_fields=fields, prefill=prefill_seller_fields(fields, vehicle))


@router.post("/template/fill", response_model=TemplateTextResponse)
def fill_template(
    payload: TemplateFillRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
) -> TemplateTextResponse:
    authorize_request(authorization, ["templates.write"])
    filled = ContractAIService(orchestrator).fill_seller_variables(payload.template, payload.seller_inputs)
    return TemplateTextResponse(template=filled)


@router.post("/template/refine", response_model=TemplateTextResponse)
def refine_template(
    payload: TemplateRefineRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
) -> TemplateTextResponse:
    authorize_request(authorization, ["templates.write"])
    refined = ContractAIService(orchestrator).refine_contract_text(payload.text, payload.instruction)
    return TemplateTextResponse(template=refined)
