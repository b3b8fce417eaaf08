"""Contract request/response schemas for API contracts."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import ContractStatus


class SignatureReceiptSchema(BaseModel):
    tx_hash: str
    block_number: int
    timestamp: str
    gas_used: int
    contract_address: str


class ContractResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    buyer_id: str
    seller_id: str
    vehicle_id: str
    vehicle_name: str
    contract_html: str
    contract_summary: str
    highlighted_clauses: dict
    status: ContractStatus
    change_request_message: str
    seller_note: str
    signature_receipt: SignatureReceiptSchema | None = None
    revision: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ContractVariablesResponse(BaseModel):
    fields: list[str]
    prefill: dict[str, str]


class ContractDraftRequest(BaseModel):
    vehicle_id: str = Field(min_length=1, max_length=64)
    buyer_inputs: dict[str, str] = Field(default_factory=dict)
    region: str | None = Field(default=None, max_length=80)


class ContractRevisionTokenRequest(BaseModel):
    expected_revision: int | None = Field(default=None, ge=1)


class ContractChangeRequest(ContractRevisionTokenRequest):
    message: str = Field(min_length=1, max_length=4000)
    analysis_phase: bool = False


class ContractReviewRequest(BaseModel):
    region: str = Field(default="General", max_length=80)


class ContractRevisionRequest(ContractRevisionTokenRequest):
    revised_html: str = Field(min_length=1, max_length=50000)
    seller_note: str | None = Field(default=None, max_length=4000)
    note_only: bool = False
    confirm: bool = False


class ComplianceCheckRequest(BaseModel):
    revised_html: str = Field(min_length=1, max_length=50000)


class ComplianceVerdictResponse(BaseModel):
    satisfied: bool
    reason: str


class AssistantQuestionRequest(BaseModel):
    question: str = Field(min_length=1, max_length=2000)


class AssistantAnswerResponse(BaseModel):
    answer: str
    citation_quote: str


class JurisdictionRequest(BaseModel):
    contract_html: str = Field(min_length=1, max_length=50000)
    region: str = Field(min_length=1, max_length=80)


class ContractHtmlResponse(BaseModel):
    contract_html: str
