"""Visualizer schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class VisualGenerateRequest(BaseModel):
    vehicle_id: str = Field(min_length=1, max_length=64)
    context: str = Field(min_length=1, max_length=500)
    modification: str | None = Field(default=None, max_length=500)
    reference_image_b64: str | None = None


class VisualGenerateResponse(BaseModel):
    images: list[str]


class VisualSaveRequest(BaseModel):
    vehicle_id: str = Field(min_length=1, max_length=64)
    image_url: str = Field(min_length=1)
    prompt: str | None = Field(default=None, max_length=1000)


class SavedVisualResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    buyer_id: str
    vehicle_id: str
    vehicle_name: str
    image_url: str
    prompt: str
    created_at: datetime | None = None
