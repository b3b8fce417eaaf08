from __future__ import annotations

from app.core.schemas import IntentResult
from app.database.seed import catalog_vehicles
from app.models import Vehicle
from app.services.matching_service import (
    MatchAnswers,
    budget_points,
    match_or_fallback,
    rank,
    score_vehicle,
    search_terms,
    seat_points,
)


def _vehicle(vehicle_id: str, **overrides) -> Vehicle:
    values = {
        "id": vehicle_id,
        "seller_id": None,
        "name": "Plain",
        "trim": "",
        "drive": "FWD",
        "seats": 5,
        "price_low": 1000000,
        "price_high": 1100000,
        "use_cases": [],
        "f_and_i": [],
        "image_url": None,
        "visual_desc": None,
        "contract_template": None,
        "insurance_options": [],
    }
    values.update(overrides)
    return Vehicle(**values)


def _intent(**overrides) -> IntentResult:
    values = {"category": "Family", "lifestyle_patterns": [], "detected_budget": 0, "min_seats": 0}
    values.update(overrides)
    return IntentResult(**values)


def test_zero_budget_and_seats_disable_budget_and_seat_rules():
    intent = _intent()
    answers = MatchAnswers(terrain="snowy passes", primary_use="city commute")
    terms = search_terms(intent, answers)
    for vehicle in catalog_vehicles():
        scored = score_vehicle(vehicle, intent, answers, terms)
        assert scored.breakdown["budget"] == 0
        assert scored.breakdown["seats"] == 0
        assert scored.score == scored.breakdown["keywords"] + scored.breakdown["terrain"] + scored.breakdown["usage"]


def test_budget_rule_bounds():
    budget = 2000000
    for price in (100000, 1599999, 1600000, 2000000):
        assert budget_points(price, budget) >= 30
    assert budget_points(1500000, budget) == 35
    assert budget_points(1600000, budget) == 30
    assert budget_points(2200000, budget) == 10
    assert budget_points(2300001, budget) == -50
    assert budget_points(9000000, budget) == -50


def test_seat_rule_rewards_tight_fit():
    assert seat_points(5, 5) == 30
    assert seat_points(6, 5) == 30
    assert seat_points(8, 5) == 25
    assert seat_points(4, 5) == -40
    assert seat_points(2, 0) == 0


def test_equal_scores_keep_inventory_order():
    inventory = [_vehicle("a1"), _vehicle("b2"), _vehicle("c3")]
    ranked = rank(_intent(), inventory)
    assert [item.vehicle.id for item in ranked] == ["a1", "b2", "c3"]
    assert len({item.score for item in ranked}) == 1


def test_all_penalised_inventory_falls_back_to_first_six_unscored():
    inventory = [_vehicle(f"x{i}", seats=2, price_low=9000000) for i in range(9)]
    intent = _intent(detected_budget=1000000, min_seats=5)
    assert rank(intent, inventory) == []

    results, fallback_used = match_or_fallback(intent, inventory, fallback_size=6)
    assert fallback_used is True
    assert [item.vehicle.id for item in results] == [f"x{i}" for i in range(6)]
    assert all(item.score is None for item in results)


def test_fallback_size_comes_from_config():
    inventory = [_vehicle(f"y{i}", seats=2, price_low=9000000) for i in range(8)]
    results, _ = match_or_fallback(_intent(detected_budget=1000000, min_seats=5), inventory)
    assert len(results) == 6


def test_seat_penalty_outranks_cheaper_small_vehicle():
    five_seat = _vehicle("five", drive="AWD", seats=5, price_low=1200000)
    four_seat = _vehicle("four", drive="AWD", seats=4, price_low=1000000)
    ranked = rank(_intent(detected_budget=1500000, min_seats=5), [four_seat, five_seat])
    assert [item.vehicle.id for item in ranked] == ["five", "four"]
    assert ranked[0].score > ranked[1].score


def test_muddy_terrain_separates_awd_from_rwd_by_twenty():
    awd = _vehicle("a", drive="AWD")
    rwd = _vehicle("b", drive="RWD")
    ranked = rank(_intent(), [rwd, awd], MatchAnswers(terrain="muddy trails"))
    scores = {item.vehicle.id: item.score for item in ranked}
    assert scores["a"] - scores["b"] == 20


def test_usage_tags_add_points():
    tagged = _vehicle("t1", use_cases=["Camping"])
    plain = _vehicle("t2")
    ranked = rank(_intent(), [plain, tagged], MatchAnswers(primary_use="weekend camp trips"))
    assert ranked[0].vehicle.id == "t1"
    assert ranked[0].breakdown["usage"] == 10


def test_repeated_terms_count_twice():
    vehicle = _vehicle("k1", name="Mountain Goat")
    once = rank(_intent(), [vehicle], MatchAnswers(people="goat"))[0]
    twice = rank(_intent(), [vehicle], MatchAnswers(people="goat goat"))[0]
    assert twice.breakdown["keywords"] == once.breakdown["keywords"] + 2


def test_empty_inventory_yields_empty_list():
    assert rank(_intent(detected_budget=1000000), []) == []
    assert match_or_fallback(_intent(), []) == ([], False)


def test_family_intent_prefers_family_catalog_vehicles():
    intent = _intent(category="Family", lifestyle_patterns=["Kids"], detected_budget=4000000, min_seats=7)
    ranked = rank(intent, catalog_vehicles(), MatchAnswers(people="two kids and grandparents"))
    assert ranked[0].vehicle.id in {"v4", "v9"}


def test_threshold_excludes_exactly_minus_twenty():
    # -40 seats + 3 keyword hits + 15 traction = -19; -40 seats + 10 keyword hits = -20
    just_above = _vehicle("edge-above", name="Goat", drive="AWD", seats=4)
    at_threshold = _vehicle("edge-at", name="Lynx", drive="FWD", seats=4)
    answers = MatchAnswers(people="goat " * 3 + "lynx " * 10, terrain="muddy trails")
    intent = _intent(min_seats=5)

    terms = search_terms(intent, answers)
    assert score_vehicle(just_above, intent, answers, terms).score == -19
    assert score_vehicle(at_threshold, intent, answers, terms).score == -20

    ranked = rank(intent, [at_threshold, just_above], answers)
    assert [item.vehicle.id for item in ranked] == ["edge-above"]

    results, fallback_used = match_or_fallback(intent, [at_threshold], answers)
    assert fallback_used is True
    assert [(item.vehicle.id, item.score) for item in results] == [("edge-at", None)]
