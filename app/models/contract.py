"""Sales contract model module."""

from __future__ import annotations

from sqlalchemy import JSON, Enum, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin
from app.models.enums import ContractStatus


class Contract(Base, TimestampMixin):
    __tablename__ = "contracts"
    __table_args__ = (
        Index("idx_contracts_buyer_status", "buyer_id", "status"),
        Index("idx_contracts_seller_status", "seller_id", "status"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    buyer_id: Mapped[str] = mapped_column(String(64), nullable=False)
    seller_id: Mapped[str] = mapped_column(String(64), nullable=False)
    vehicle_id: Mapped[str] = mapped_column(String(64), nullable=False)
    vehicle_name: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    contract_html: Mapped[str] = mapped_column(Text, default="", nullable=False)
    contract_summary: Mapped[str] = mapped_column(Text, default="", nullable=False)
    highlighted_clauses: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    status: Mapped[ContractStatus] = mapped_column(Enum(ContractStatus), default=ContractStatus.PENDING, nullable=False)
    change_request_message: Mapped[str] = mapped_column(Text, default="", nullable=False)
    seller_note: Mapped[str] = mapped_column(Text, default="", nullable=False)
    signature_receipt: Mapped[dict | None] = mapped_column(JSON)
    # Optimistic concurrency token, bumped on every write.
    revision: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
