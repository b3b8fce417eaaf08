"""Buyer activity feed and notifications derived from it."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.models import Contract, ContractStatus, QueryStatus, SavedVisual, UserQuery
from app.services.base_service import BaseService
from app.services.contract_service import ContractService
from app.services.query_service import QueryService
from app.services.visualizer_service import VisualizerService

REPLY_PREVIEW_LENGTH = 30


@dataclass(frozen=True)
class Notification:
    id: str
    type: str
    message: str
    target_id: str
    target_type: str


def build_notifications(queries: list[UserQuery], contracts: list[Contract]) -> list[Notification]:
    notes: list[Notification] = []
    for query in queries:
        if query.status == QueryStatus.CLOSED and query.reply:
            notes.append(
                Notification(
                    id=query.id,
                    type="success",
                    message=f'Query Replied: {query.vehicle_name} - "{query.reply[:REPLY_PREVIEW_LENGTH]}..."',
                    target_id=query.id,
                    target_type="query",
                )
            )
    for contract in contracts:
        if contract.status == ContractStatus.PENDING:
            notes.append(
                Notification(
                    id=contract.id,
                    type="info",
                    message=f"Contract Updated/Pending Review: {contract.vehicle_name}",
                    target_id=contract.id,
                    target_type="contract",
                )
            )
    return notes


@dataclass
class BuyerActivity:
    contracts: list[Contract]
    queries: list[UserQuery]
    saved_visuals: list[SavedVisual]
    notifications: list[Notification]


class ActivityService(BaseService):
    def __init__(self, db: Session | None = None) -> None:
        super().__init__(db=db)

    def for_buyer(
        self,
        buyer_id: str,
        contract_status: ContractStatus | None = None,
        query_status: QueryStatus | None = None,
    ) -> BuyerActivity:
        contracts = ContractService(db=self.db).list_for_buyer(buyer_id)
        queries = QueryService(db=self.db).list_for_buyer(buyer_id)
        visuals = VisualizerService(db=self.db).list_for_buyer(buyer_id)
        notifications = build_notifications(queries, contracts)
        if contract_status is not None:
            contracts = [contract for contract in contracts if contract.status == contract_status]
        if query_status is not None:
            queries = [query for query in queries if query.status == query_status]
        return BuyerActivity(contracts=contracts, queries=queries, saved_visuals=visuals, notifications=notifications)
