"""Insurance advice schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from app.schemas.matching import IntentResponse


class InsuranceRecommendRequest(BaseModel):
    intent: IntentResponse | None = None


class InsuranceRecommendationResponse(BaseModel):
    recommended_plan_id: str
    reason: str


class InsuranceQuestionRequest(BaseModel):
    question: str = Field(min_length=1, max_length=2000)


class InsuranceAnswerResponse(BaseModel):
    answer: str
