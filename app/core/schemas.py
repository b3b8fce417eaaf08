"""Pydantic schemas for strict LLM output validation.

Every model declares a default for each field so a partial payload still
yields a usable value; payloads that are not JSON objects are rejected by
`parse_schema` and the caller substitutes its documented fallback.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from app.models.enums import IntentCategory

DEFAULT_INTENT_CATEGORY = IntentCategory.CITY_COMMUTE.value


def _clean_strings(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


class IntentResult(BaseModel):
    category: str = DEFAULT_INTENT_CATEGORY
    lifestyle_patterns: list[str] = Field(default_factory=list)
    recommended_features: list[str] = Field(default_factory=list)
    detected_budget: int = 0
    min_seats: int = 0

    @field_validator("category", mode="before")
    @classmethod
    def category_in_enum(cls, value: object) -> str:
        candidate = str(value or "").strip()
        for member in IntentCategory:
            if member.value.lower() == candidate.lower():
                return member.value
        return DEFAULT_INTENT_CATEGORY

    @field_validator("lifestyle_patterns", "recommended_features", mode="before")
    @classmethod
    def strings_only(cls, value: object) -> list[str]:
        return _clean_strings(value)

    @field_validator("detected_budget", "min_seats", mode="before")
    @classmethod
    def non_negative_int(cls, value: object) -> int:
        try:
            number = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 0
        if not math.isfinite(number):
            return 0
        return max(int(number), 0)


FALLBACK_INTENT = IntentResult(
    category=DEFAULT_INTENT_CATEGORY,
    lifestyle_patterns=["General Use"],
    recommended_features=["Standard Safety"],
    detected_budget=0,
    min_seats=0,
)


class ContractVariables(BaseModel):
    fields: list[str] = Field(default_factory=list)

    @field_validator("fields", mode="before")
    @classmethod
    def strings_only(cls, value: object) -> list[str]:
        return _clean_strings(value)


class SellerPlaceholders(BaseModel):
    seller_fields: list[str] = Field(default_factory=list)

    @field_validator("seller_fields", mode="before")
    @classmethod
    def strings_only(cls, value: object) -> list[str]:
        return _clean_strings(value)


class ContractDraft(BaseModel):
    final_contract_html: str = Field(min_length=1)
    summary: str = "Draft"


class ClauseHighlights(BaseModel):
    obligations: list[str] = Field(default_factory=list)
    fees_penalties: list[str] = Field(default_factory=list)
    risk_level: str = "Unknown"

    @field_validator("obligations", "fees_penalties", mode="before")
    @classmethod
    def strings_only(cls, value: object) -> list[str]:
        return _clean_strings(value)


class AssistantAnswer(BaseModel):
    answer: str = Field(min_length=1)
    citation_quote: str = ""


class ComplianceVerdict(BaseModel):
    satisfied: bool
    reason: str = ""


class AccountValidation(BaseModel):
    is_valid: bool = True
    reasons: list[str] = Field(default_factory=list)
    risk_score: float = Field(default=0.0, ge=0.0, le=1.0)
    recommended_fix: str = ""

    @field_validator("reasons", mode="before")
    @classmethod
    def strings_only(cls, value: object) -> list[str]:
        return _clean_strings(value)

    @field_validator("risk_score", mode="before")
    @classmethod
    def clamp_risk(cls, value: object) -> float:
        try:
            score = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 0.0
        if math.isnan(score):
            return 0.0
        return min(max(score, 0.0), 1.0)


class InsuranceRecommendation(BaseModel):
    recommended_plan_id: str = Field(default="", alias="recommendedPlanId")
    reason: str = ""

    model_config = ConfigDict(populate_by_name=True)


def parse_schema(model_cls: type[BaseModel], payload: str) -> BaseModel:
    """Validate JSON payload against a Pydantic model."""
    try:
        return model_cls.model_validate_json(payload)
    except ValidationError as exc:
        raise ValueError(str(exc)) from exc
