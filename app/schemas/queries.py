"""Buyer query (CRM) schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import QueryStatus


class QuerySendRequest(BaseModel):
    vehicle_id: str = Field(min_length=1, max_length=64)
    message: str = Field(min_length=1, max_length=4000)


class QueryReplyRequest(BaseModel):
    reply: str = Field(min_length=1, max_length=4000)


class QueryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    buyer_id: str
    buyer_name: str
    seller_id: str
    vehicle_id: str
    vehicle_name: str
    message: str
    status: QueryStatus
    reply: str | None = None
    created_at: datetime | None = None
