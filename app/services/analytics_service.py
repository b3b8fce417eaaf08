"""Usage counters and seller dashboard metrics."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from app.database.seed import catalog_vehicles
from app.llm.orchestrator import LLMOrchestrator
from app.models import Contract, ContractStatus, UsageAnalytics, Vehicle
from app.services.base_service import BaseService
from app.services.contract_service import ContractService
from app.services.vehicle_service import VehicleService

logger = logging.getLogger(__name__)

USAGE_KEY = "usage"
CATEGORY_COUNTERS = {
    "Family": "family_count",
    "City Commute": "commute_count",
    "Trekking": "trekking_count",
    "Luxury Preference": "luxury_count",
    "Budget-Constrained": "budget_count",
    "Safety-First": "safety_count",
}
COUNTER_FIELDS = (
    *CATEGORY_COUNTERS.values(),
    "total_visits",
    "total_revenue",
    "conversion_rate",
    "pending_deals",
)
BUDGET_BUCKETS = (
    ("Under 15L", 1_500_000),
    ("15L-30L", 3_000_000),
    ("30L-60L", 6_000_000),
    ("60L+", None),
)
CHATBOT_UNAVAILABLE = "I'm having trouble connecting to the assistant right now. Please try again."


@dataclass
class DashboardMetrics:
    usage: dict[str, float]
    contracts_total: int
    status_counts: dict[str, int]
    revenue: int
    conversion_rate: float
    inventory_count: int
    budget_distribution: dict[str, int] = field(default_factory=dict)


def budget_bucket(price: int) -> str:
    for label, ceiling in BUDGET_BUCKETS:
        if ceiling is None or price < ceiling:
            return label
    return BUDGET_BUCKETS[-1][0]


def compute_metrics(
    usage: dict[str, float],
    contracts: list[Contract],
    vehicles: list[Vehicle],
    prices: dict[str, int] | None = None,
) -> DashboardMetrics:
    """Contract counts and revenue; revenue sums the low price of each accepted contract's vehicle."""
    counts = Counter(contract.status.value for contract in contracts)
    status_counts = {status.value: counts.get(status.value, 0) for status in ContractStatus}
    if prices is None:
        prices = {vehicle.id: vehicle.price_low for vehicle in vehicles}
    accepted = [contract for contract in contracts if contract.status == ContractStatus.ACCEPTED]
    revenue = sum(prices.get(contract.vehicle_id, 0) for contract in accepted)
    total = len(contracts)
    conversion = round(len(accepted) / total * 100, 1) if total else 0.0

    distribution = {label: 0 for label, _ in BUDGET_BUCKETS}
    for vehicle in vehicles:
        distribution[budget_bucket(vehicle.price_low)] += 1

    return DashboardMetrics(
        usage=usage,
        contracts_total=total,
        status_counts=status_counts,
        revenue=revenue,
        conversion_rate=conversion,
        inventory_count=len(vehicles),
        budget_distribution=distribution,
    )


class AnalyticsService(BaseService):
    def __init__(self, db: Session | None = None, orchestrator: LLMOrchestrator | None = None) -> None:
        super().__init__(db=db)
        self._orchestrator = orchestrator

    @property
    def orchestrator(self) -> LLMOrchestrator:
        if self._orchestrator is None:
            self._orchestrator = LLMOrchestrator()
        return self._orchestrator

    def usage(self) -> dict[str, float]:
        """Stored counters merged over zero defaults."""
        merged: dict[str, float] = {name: 0 for name in COUNTER_FIELDS}
        row = self.db.get(UsageAnalytics, USAGE_KEY)
        if row is not None:
            merged.update({name: getattr(row, name) for name in COUNTER_FIELDS})
        return merged

    def record_intent(self, category: str) -> bool:
        """Count one matching request for `category`. Failures are logged and reported as False."""
        counter = CATEGORY_COUNTERS.get(category)
        if counter is None:
            return False
        try:
            row = self.db.get(UsageAnalytics, USAGE_KEY)
            if row is None:
                row = UsageAnalytics(key=USAGE_KEY)
                for name in COUNTER_FIELDS:
                    setattr(row, name, 0)
                self.db.add(row)
            setattr(row, counter, getattr(row, counter) + 1)
            row.total_visits += 1
            self.commit()
        except Exception as exc:
            logger.warning(
                "analytics.increment.failed",
                extra={"event": "analytics.increment.failed", "category": category, "error": str(exc)},
            )
            return False
        return True

    def dashboard(self, seller_id: str) -> DashboardMetrics:
        contracts = ContractService(db=self.db).list_for_seller(seller_id)
        vehicles = VehicleService(db=self.db).list_vehicles()
        # Contracts may reference catalog vehicles that were never stored.
        prices = {vehicle.id: vehicle.price_low for vehicle in catalog_vehicles()}
        prices.update({vehicle.id: vehicle.price_low for vehicle in vehicles})
        return compute_metrics(self.usage(), contracts, vehicles, prices)

    def query_analytics_chatbot(self, question: str, seller_id: str) -> str:
        metrics = self.dashboard(seller_id)
        data = {
            "summary": "Automotive Sales Dashboard",
            "stats": metrics.usage,
            "contracts": metrics.status_counts,
            "revenue": metrics.revenue,
            "conversion_rate": metrics.conversion_rate,
            "inventory_count": metrics.inventory_count,
        }
        return self.orchestrator.generate_text(
            "analytics.chat",
            {"question": question, "data": data},
            fallback=CHATBOT_UNAVAILABLE,
        )
