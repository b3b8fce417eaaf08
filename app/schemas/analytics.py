"""Seller analytics and buyer activity schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from app.schemas.contracts import ContractResponse
from app.schemas.queries import QueryResponse
from app.schemas.visuals import SavedVisualResponse


class DashboardResponse(BaseModel):
    usage: dict[str, float]
    contracts_total: int
    status_counts: dict[str, int]
    revenue: int
    conversion_rate: float
    inventory_count: int
    budget_distribution: dict[str, int]


class ChatbotRequest(BaseModel):
    question: str = Field(min_length=1, max_length=2000)


class ChatbotResponse(BaseModel):
    answer: str


class NotificationResponse(BaseModel):
    id: str
    type: str
    message: str
    target_id: str
    target_type: str


class ActivityResponse(BaseModel):
    contracts: list[ContractResponse]
    queries: list[QueryResponse]
    saved_visuals: list[SavedVisualResponse]
    notifications: list[NotificationResponse]
