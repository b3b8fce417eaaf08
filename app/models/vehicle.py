"""Vehicle catalog model module."""

from __future__ import annotations

from sqlalchemy import JSON, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin


class Vehicle(Base, TimestampMixin):
    __tablename__ = "vehicles"
    __table_args__ = (
        Index("idx_vehicles_seller", "seller_id"),
        Index("idx_vehicles_drive", "drive"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    seller_id: Mapped[str | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    trim: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    drive: Mapped[str] = mapped_column(String(8), default="FWD", nullable=False)
    seats: Mapped[int] = mapped_column(Integer, default=5, nullable=False)
    price_low: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    price_high: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    use_cases: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    f_and_i: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    image_url: Mapped[str | None] = mapped_column(Text)
    visual_desc: Mapped[str | None] = mapped_column(Text)
    contract_template: Mapped[str | None] = mapped_column(Text)
    insurance_options: Mapped[list] = mapped_column(JSON, default=list, nullable=False)

    @property
    def price_range(self) -> tuple[int, int]:
        return (self.price_low, self.price_high)
