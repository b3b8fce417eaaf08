"""Matching request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from app.schemas.vehicles import VehicleResponse


class MatchRequest(BaseModel):
    people: str = Field(default="", max_length=1000)
    terrain: str = Field(default="", max_length=1000)
    primary_use: str = Field(default="", max_length=1000)
    budget: str = Field(default="", max_length=1000)


class IntentResponse(BaseModel):
    category: str
    lifestyle_patterns: list[str]
    recommended_features: list[str]
    detected_budget: int
    min_seats: int


class ScoredVehicleResponse(BaseModel):
    vehicle: VehicleResponse
    score: int | None
    breakdown: dict[str, int]


class MatchResponse(BaseModel):
    intent: IntentResponse
    vehicles: list[ScoredVehicleResponse]
    fallback_used: bool
