"""Contract lifecycle endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.v1._authz import DOMAIN_ERRORS, authorize_request, ensure_party, load_actor, to_http_error
from app.core.dependencies import get_db_session, get_orchestrator, get_signature_service
from app.database.seed import GENERIC_SELLER_ID
from app.llm.orchestrator import LLMOrchestrator
from app.models import Contract, ContractStatus, User, UserRole
from app.schemas.contracts import (
    AssistantAnswerResponse,
    AssistantQuestionRequest,
    ComplianceCheckRequest,
    ComplianceVerdictResponse,
    ContractChangeRequest,
    ContractDraftRequest,
    ContractHtmlResponse,
    ContractResponse,
    ContractReviewRequest,
    ContractRevisionRequest,
    ContractRevisionTokenRequest,
    ContractVariablesResponse,
    JurisdictionRequest,
)
from app.services.contract_ai_service import ContractAIService, prefill_buyer_fields
from app.services.contract_service import ContractService
from app.services.signature_service import SignatureService
from app.services.vehicle_service import VehicleService

router = APIRouter(prefix="/contracts", tags=["contracts"])


def _service(db: Session, orchestrator: LLMOrchestrator, signer: SignatureService | None = None) -> ContractService:
    return ContractService(db=db, ai=ContractAIService(orchestrator), signer=signer)


def _load_contract(service: ContractService, contract_id: str) -> Contract:
    try:
        return service.get(contract_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc


def _ensure_seller_side(actor: User, contract: Contract) -> None:
    if actor.role == UserRole.SELLER and contract.seller_id == GENERIC_SELLER_ID:
        return
    ensure_party(actor, contract.seller_id)


@router.get("", response_model=list[ContractResponse])
def list_contracts(
    status_filter: ContractStatus | None = Query(default=None, alias="status"),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
) -> list[ContractResponse]:
    current = authorize_request(authorization, ["contracts.read"])
    actor = load_actor(db, current)
    service = _service(db, orchestrator)
    if actor.role == UserRole.BUYER:
        contracts = service.list_for_buyer(actor.id, status_filter)
    elif actor.role == UserRole.SELLER:
        contracts = service.list_for_seller(actor.id, status_filter)
    else:
        stmt = select(Contract)
        if status_filter is not None:
            stmt = stmt.where(Contract.status == status_filter)
        contracts = list(db.scalars(stmt.order_by(Contract.created_at.desc())))
    return [ContractResponse.model_validate(contract) for contract in contracts]


@router.get("/fields/{vehicle_id}", response_model=ContractVariablesResponse)
def contract_fields(
    vehicle_id: str,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
) -> ContractVariablesResponse:
    """Buyer fields the vehicle's template needs, prefilled from the profile where obvious."""
    current = authorize_request(authorization, ["contracts.draft"])
    actor = load_actor(db, current)
    try:
        vehicle = VehicleService(db=db).resolve(vehicle_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    fields = ContractAIService(orchestrator).extract_contract_variables(vehicle.contract_template)
    return ContractVariablesResponse(fields=fields, prefill=prefill_buyer_fields(fields, actor.name, actor.email))


@router.post("", response_model=ContractResponse, status_code=status.HTTP_201_CREATED)
def draft_contract(
    payload: ContractDraftRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
) -> ContractResponse:
    current = authorize_request(authorization, ["contracts.draft"])
    actor = load_actor(db, current)
    try:
        vehicle = VehicleService(db=db).resolve(payload.vehicle_id)
        contract = _service(db, orchestrator).draft(actor, vehicle, payload.buyer_inputs, region=payload.region)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    return ContractResponse.model_validate(contract)


@router.post("/jurisdiction", response_model=ContractHtmlResponse)
def adapt_jurisdiction(
    payload: JurisdictionRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
) -> ContractHtmlResponse:
    authorize_request(authorization, ["contracts.draft"])
    html = ContractAIService(orchestrator).adapt_contract_to_jurisdiction(payload.contract_html, payload.region)
    return ContractHtmlResponse(contract_html=html)


@router.get("/{contract_id}", response_model=ContractResponse)
def get_contract(
    contract_id: str,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
) -> ContractResponse:
    current = authorize_request(authorization, ["contracts.read"])
    actor = load_actor(db, current)
    contract = _load_contract(_service(db, orchestrator), contract_id)
    if actor.role == UserRole.SELLER:
        _ensure_seller_side(actor, contract)
    else:
        ensure_party(actor, contract.buyer_id)
    return ContractResponse.model_validate(contract)


@router.post("/{contract_id}/review", response_model=ContractResponse)
def review_contract(
    contract_id: str,
    payload: ContractReviewRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
) -> ContractResponse:
    current = authorize_request(authorization, ["contracts.review"])
    actor = load_actor(db, current)
    service = _service(db, orchestrator)
    ensure_party(actor, _load_contract(service, contract_id).buyer_id)
    try:
        contract = service.mark_reviewed(contract_id, payload.region)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    return ContractResponse.model_validate(contract)


@router.post("/{contract_id}/assistant", response_model=AssistantAnswerResponse)
def ask_contract_assistant(
    contract_id: str,
    payload: AssistantQuestionRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
) -> AssistantAnswerResponse:
    current = authorize_request(authorization, ["contracts.review"])
    actor = load_actor(db, current)
    contract = _load_contract(_service(db, orchestrator), contract_id)
    ensure_party(actor, contract.buyer_id)
    answer = ContractAIService(orchestrator).query_contract_assistant(payload.question, contract.contract_html)
    return AssistantAnswerResponse(answer=answer.answer, citation_quote=answer.citation_quote)


@router.post("/{contract_id}/changes", response_model=ContractResponse)
def request_changes(
    contract_id: str,
    payload: ContractChangeRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
) -> ContractResponse:
    current = authorize_request(authorization, ["contracts.review"])
    actor = load_actor(db, current)
    service = _service(db, orchestrator)
    ensure_party(actor, _load_contract(service, contract_id).buyer_id)
    try:
        contract = service.request_changes(
            contract_id,
            payload.message,
            buyer_name=actor.name,
            expected_revision=payload.expected_revision,
            analysis_phase=payload.analysis_phase,
        )
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    return ContractResponse.model_validate(contract)


@router.post("/{contract_id}/compliance", response_model=ComplianceVerdictResponse)
def check_compliance(
    contract_id: str,
    payload: ComplianceCheckRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
) -> ComplianceVerdictResponse:
    """Advisory only; nothing is written."""
    current = authorize_request(authorization, ["contracts.revise"])
    actor = load_actor(db, current)
    service = _service(db, orchestrator)
    contract = _load_contract(service, contract_id)
    _ensure_seller_side(actor, contract)
    verdict = service.check_compliance(contract.contract_html, payload.revised_html, contract.change_request_message)
    return ComplianceVerdictResponse(satisfied=verdict.satisfied, reason=verdict.reason)


@router.post("/{contract_id}/revision", response_model=ContractResponse)
def submit_revision(
    contract_id: str,
    payload: ContractRevisionRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
) -> ContractResponse:
    current = authorize_request(authorization, ["contracts.revise"])
    actor = load_actor(db, current)
    service = _service(db, orchestrator)
    _ensure_seller_side(actor, _load_contract(service, contract_id))
    try:
        contract = service.submit_revision(
            contract_id,
            payload.revised_html,
            seller_note=payload.seller_note,
            note_only=payload.note_only,
            confirm=payload.confirm,
            expected_revision=payload.expected_revision,
        )
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    return ContractResponse.model_validate(contract)


@router.post("/{contract_id}/sign", response_model=ContractResponse)
def sign_contract(
    contract_id: str,
    payload: ContractRevisionTokenRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
    signer: SignatureService = Depends(get_signature_service),
) -> ContractResponse:
    current = authorize_request(authorization, ["contracts.sign"])
    actor = load_actor(db, current)
    service = _service(db, orchestrator, signer)
    ensure_party(actor, _load_contract(service, contract_id).buyer_id)
    try:
        contract = service.sign(contract_id, actor.email, expected_revision=payload.expected_revision)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    return ContractResponse.model_validate(contract)


@router.delete("/{contract_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_contract(
    contract_id: str,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
) -> None:
    current = authorize_request(authorization, ["contracts.delete"])
    actor = load_actor(db, current)
    service = _service(db, orchestrator)
    contract = _load_contract(service, contract_id)
    ensure_party(actor, contract.buyer_id)
    if contract.status == ContractStatus.ACCEPTED and actor.role != UserRole.ADMIN:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Signed contracts cannot be deleted.")
    service.delete(contract_id)
