"""Vehicle matching: deterministic ranking of the catalog against a buyer intent."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Sequence

from sqlalchemy.orm import Session

from app.core.config import get_config
from app.core.schemas import IntentResult
from app.llm.orchestrator import LLMOrchestrator
from app.models import Vehicle
from app.services.analytics_service import AnalyticsService
from app.services.base_service import BaseService
from app.services.intent_service import IntentService
from app.services.vehicle_service import VehicleService

logger = logging.getLogger(__name__)

SCORE_THRESHOLD = -20
ROUGH_TERRAIN_TERMS = ("snow", "mud", "off-road", "mountain")
TRACTION_DRIVES = frozenset({"AWD", "4WD"})
COMMUTE_TERMS = ("commute", "city")
COMMUTE_TAGS = frozenset({"Efficient", "City Commute", "Eco-Friendly"})
ADVENTURE_TERMS = ("camp", "adventure")
ADVENTURE_TAGS = frozenset({"Camping", "Adventure"})


@dataclass(frozen=True)
class MatchAnswers:
    """The buyer's questionnaire, free text per question."""

    people: str = ""
    terrain: str = ""
    primary_use: str = ""
    budget: str = ""

    def as_list(self) -> list[str]:
        return [self.people, self.terrain, self.primary_use, self.budget]

    def summary(self) -> str:
        return f"People: {self.people}. Terrain: {self.terrain}. Use: {self.primary_use}. Budget: {self.budget}."


@dataclass
class ScoredVehicle:
    vehicle: Vehicle
    score: int | None
    breakdown: dict[str, int] = field(default_factory=dict)


def budget_points(price: int, budget: int) -> int:
    if budget <= 0:
        return 0
    if price <= budget:
        return 35 if price < budget * 0.8 else 30
    if price <= budget * 1.15:
        return 10
    return -50


def seat_points(seats: int, min_seats: int) -> int:
    if min_seats <= 0:
        return 0
    if seats < min_seats:
        return -40
    return 30 if seats in (min_seats, min_seats + 1) else 25


def search_terms(intent: IntentResult, answers: MatchAnswers) -> list[str]:
    """Lower-cased terms from the answers, category and tags. Duplicates are kept."""
    terms = " ".join(answers.as_list()).lower().split()
    terms.append(intent.category.lower())
    terms.extend(tag.lower() for tag in intent.lifestyle_patterns)
    return [term for term in terms if len(term) > 2]


def vehicle_document(vehicle: Vehicle) -> str:
    payload = {
        "id": vehicle.id,
        "name": vehicle.name,
        "trim": vehicle.trim,
        "drive": vehicle.drive,
        "seats": vehicle.seats,
        "use_cases": list(vehicle.use_cases or []),
        "price_range": list(vehicle.price_range),
        "f_and_i": list(vehicle.f_and_i or []),
        "image_url": vehicle.image_url,
        "visual_desc": vehicle.visual_desc,
        "contract_template": vehicle.contract_template,
        "insurance_options": list(vehicle.insurance_options or []),
    }
    return json.dumps(payload, ensure_ascii=False, default=str).lower()


def keyword_points(document: str, terms: Sequence[str]) -> int:
    return 2 * sum(1 for term in terms if term in document)


def terrain_points(drive: str, terrain_answer: str) -> int:
    terrain = terrain_answer.lower()
    if not any(term in terrain for term in ROUGH_TERRAIN_TERMS):
        return 0
    if drive in TRACTION_DRIVES:
        return 15
    if drive == "RWD":
        return -5
    return 0


def usage_points(use_cases: Sequence[str], use_answer: str) -> int:
    usage = use_answer.lower()
    tags = set(use_cases)
    points = 0
    if any(term in usage for term in COMMUTE_TERMS) and tags & COMMUTE_TAGS:
        points += 10
    if any(term in usage for term in ADVENTURE_TERMS) and tags & ADVENTURE_TAGS:
        points += 10
    return points


def score_vehicle(vehicle: Vehicle, intent: IntentResult, answers: MatchAnswers, terms: Sequence[str]) -> ScoredVehicle:
    breakdown = {
        "budget": budget_points(vehicle.price_low, intent.detected_budget),
        "seats": seat_points(vehicle.seats, intent.min_seats),
        "keywords": keyword_points(vehicle_document(vehicle), terms),
        "terrain": terrain_points(vehicle.drive, answers.terrain),
        "usage": usage_points(vehicle.use_cases or [], answers.primary_use),
    }
    return ScoredVehicle(vehicle=vehicle, score=sum(breakdown.values()), breakdown=breakdown)


def rank(intent: IntentResult, inventory: Sequence[Vehicle], answers: MatchAnswers | None = None) -> list[ScoredVehicle]:
    """
    Score every vehicle and return those above the threshold, best first.

    Pure and deterministic. Equal scores keep inventory order. An empty
    inventory yields an empty list.
    """
    answers = answers or MatchAnswers()
    terms = search_terms(intent, answers)
    scored = [score_vehicle(vehicle, intent, answers, terms) for vehicle in inventory]
    kept = [item for item in scored if item.score > SCORE_THRESHOLD]
    return sorted(kept, key=lambda item: item.score, reverse=True)


def match_or_fallback(
    intent: IntentResult,
    inventory: Sequence[Vehicle],
    answers: MatchAnswers | None = None,
    fallback_size: int | None = None,
) -> tuple[list[ScoredVehicle], bool]:
    """Ranked matches, or the first catalog entries unscored when nothing qualifies."""
    ranked = rank(intent, inventory, answers)
    if ranked or not inventory:
        return ranked, False

    size = get_config().MATCH_FALLBACK_SIZE if fallback_size is None else fallback_size
    logger.info(
        "matching.fallback.used",
        extra={"event": "matching.fallback.used", "inventory_size": len(inventory), "fallback_size": size},
    )
    return [ScoredVehicle(vehicle=vehicle, score=None) for vehicle in inventory[:size]], True


@dataclass
class MatchOutcome:
    intent: IntentResult
    vehicles: list[ScoredVehicle]
    fallback_used: bool


class MatchingService(BaseService):
    """Questionnaire to ranked vehicles: classify, count, fetch, rank."""

    def __init__(self, db: Session | None = None, orchestrator: LLMOrchestrator | None = None) -> None:
        super().__init__(db=db)
        self.intents = IntentService(orchestrator=orchestrator)

    def match(self, answers: MatchAnswers) -> MatchOutcome:
        intent = self.intents.analyze_intent(answers.summary())
        AnalyticsService(db=self.db).record_intent(intent.category)
        inventory = VehicleService(db=self.db).inventory()
        vehicles, fallback_used = match_or_fallback(intent, inventory, answers)
        logger.info(
            "matching.completed",
            extra={
                "event": "matching.completed",
                "category": intent.category,
                "matches": len(vehicles),
                "fallback_used": fallback_used,
            },
        )
        return MatchOutcome(intent=intent, vehicles=vehicles, fallback_used=fallback_used)
