"""Aggregate usage counters for the seller dashboard."""

from __future__ import annotations

from sqlalchemy import Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin


class UsageAnalytics(Base, TimestampMixin):
    __tablename__ = "usage_analytics"

    key: Mapped[str] = mapped_column(String(32), primary_key=True)
    family_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    commute_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    trekking_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    luxury_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    budget_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    safety_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_visits: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_revenue: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    conversion_rate: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    pending_deals: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
