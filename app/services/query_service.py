"""Buyer-to-seller queries (the seller's CRM inbox)."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.exceptions import AuthorizationError, ValidationError
from app.database.seed import GENERIC_SELLER_ID
from app.models import QueryStatus, User, UserQuery, UserRole, Vehicle
from app.services.base_service import BaseService
from app.utils.ids import new_id
from app.utils.validators import sanitize_text

logger = logging.getLogger(__name__)

INSURANCE_QUERY_TAG = "[INSURANCE QUERY]:"


class QueryService(BaseService):
    def __init__(self, db: Session | None = None) -> None:
        super().__init__(db=db)

    def get(self, query_id: str) -> UserQuery:
        return self.get_or_raise(UserQuery, query_id, "Query")

    def send(self, buyer: User, vehicle: Vehicle, message: str, tag: str | None = None) -> UserQuery:
        message = sanitize_text(message, max_len=4000)
        if not message:
            raise ValidationError("Query message is required.")

        query = UserQuery(
            id=new_id(),
            buyer_id=buyer.id,
            buyer_name=buyer.name,
            seller_id=vehicle.seller_id or GENERIC_SELLER_ID,
            vehicle_id=vehicle.id,
            vehicle_name=vehicle.name,
            message=f"{tag} {message}" if tag else message,
            status=QueryStatus.OPEN,
        )
        self.db.add(query)
        self.commit()
        self.db.refresh(query)
        logger.info(
            "query.sent",
            extra={"event": "query.sent", "query_id": query.id, "vehicle_id": vehicle.id, "tagged": bool(tag)},
        )
        return query

    def list_for_buyer(self, buyer_id: str, status: QueryStatus | None = None) -> list[UserQuery]:
        stmt = select(UserQuery).where(UserQuery.buyer_id == buyer_id)
        if status is not None:
            stmt = stmt.where(UserQuery.status == status)
        return list(self.db.scalars(stmt.order_by(UserQuery.created_at.desc())))

    def list_for_seller(self, seller_id: str, status: QueryStatus | None = None) -> list[UserQuery]:
        stmt = select(UserQuery).where(UserQuery.seller_id.in_([seller_id, GENERIC_SELLER_ID]))
        if status is not None:
            stmt = stmt.where(UserQuery.status == status)
        return list(self.db.scalars(stmt.order_by(UserQuery.created_at.desc())))

    def reply(self, query_id: str, seller_id: str, reply: str) -> UserQuery:
        """Answer a query and close it."""
        reply = sanitize_text(reply, max_len=4000)
        if not reply:
            raise ValidationError("Reply text is required.")
        query = self.get(query_id)
        if query.seller_id not in (seller_id, GENERIC_SELLER_ID):
            raise AuthorizationError("Query is addressed to another seller.")

        query.reply = reply
        query.status = QueryStatus.CLOSED
        self.commit()
        self.db.refresh(query)
        logger.info("query.replied", extra={"event": "query.replied", "query_id": query_id})
        return query

    def delete(self, query_id: str, actor: User) -> None:
        query = self.get(query_id)
        is_party = actor.id in (query.buyer_id, query.seller_id)
        is_inbox_owner = actor.role == UserRole.SELLER and query.seller_id == GENERIC_SELLER_ID
        if actor.role != UserRole.ADMIN and not (is_party or is_inbox_owner):
            raise AuthorizationError("Not a party to this query.")
        self.db.delete(query)
        self.commit()
        logger.info("query.deleted", extra={"event": "query.deleted", "query_id": query_id})
