"""Buyer-to-seller query model module."""

from __future__ import annotations

from sqlalchemy import Enum, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin
from app.models.enums import QueryStatus


class UserQuery(Base, TimestampMixin):
    __tablename__ = "queries"
    __table_args__ = (
        Index("idx_queries_buyer", "buyer_id"),
        Index("idx_queries_seller_status", "seller_id", "status"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    buyer_id: Mapped[str] = mapped_column(String(64), nullable=False)
    buyer_name: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    seller_id: Mapped[str] = mapped_column(String(64), nullable=False)
    vehicle_id: Mapped[str] = mapped_column(String(64), nullable=False)
    vehicle_name: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[QueryStatus] = mapped_column(Enum(QueryStatus), default=QueryStatus.OPEN, nullable=False)
    reply: Mapped[str | None] = mapped_column(Text)
