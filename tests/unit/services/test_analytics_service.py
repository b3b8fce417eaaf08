from __future__ import annotations

from app.database.seed import GENERIC_SELLER_ID
from app.models import Contract, ContractStatus, QueryStatus, UserQuery, UserRole
from app.services.activity_service import ActivityService, build_notifications
from app.services.analytics_service import CHATBOT_UNAVAILABLE, AnalyticsService, budget_bucket
from app.utils.ids import new_id


def _contract(session, buyer_id: str, vehicle_id: str, status: ContractStatus, seller_id: str = GENERIC_SELLER_ID):
    contract = Contract(
        id=new_id(),
        buyer_id=buyer_id,
        seller_id=seller_id,
        vehicle_id=vehicle_id,
        vehicle_name=vehicle_id.upper(),
        contract_html="<p>terms</p>",
        status=status,
    )
    session.add(contract)
    session.commit()
    return contract


def test_record_intent_counts_category_and_visits(session):
    service = AnalyticsService(db=session)
    assert service.record_intent("Family") is True
    assert service.record_intent("Family") is True
    assert service.record_intent("Trekking") is True
    assert service.record_intent("Unknown") is False

    usage = service.usage()
    assert usage["family_count"] == 2
    assert usage["trekking_count"] == 1
    assert usage["total_visits"] == 3


def test_record_intent_failure_is_not_fatal(session, monkeypatch):
    service = AnalyticsService(db=session)

    def _boom():
        raise RuntimeError("store offline")

    monkeypatch.setattr(service, "commit", _boom)
    assert service.record_intent("Family") is False


def test_dashboard_revenue_uses_catalog_prices(session, make_user):
    seller = make_user(UserRole.SELLER, dealership_name="Rao Motors")
    _contract(session, "b1", "v2", ContractStatus.ACCEPTED)
    _contract(session, "b2", "v7", ContractStatus.ACCEPTED)
    _contract(session, "b3", "v1", ContractStatus.PENDING)
    _contract(session, "b4", "v1", ContractStatus.NEEDS_CHANGES, seller_id="someone-else")

    metrics = AnalyticsService(db=session).dashboard(seller.id)
    assert metrics.contracts_total == 3
    assert metrics.revenue == 2250000 + 1200000
    assert metrics.conversion_rate == 66.7
    assert metrics.status_counts["accepted"] == 2
    assert metrics.status_counts["needs_changes"] == 0


def test_budget_buckets():
    assert budget_bucket(1200000) == "Under 15L"
    assert budget_bucket(1500000) == "15L-30L"
    assert budget_bucket(12000000) == "60L+"


def test_chatbot_fallback(session, scripted):
    service = AnalyticsService(db=session, orchestrator=scripted())
    assert service.query_analytics_chatbot("How many sales?", "s1") == CHATBOT_UNAVAILABLE


def test_notifications_from_replies_and_pending_contracts(session):
    replied = UserQuery(
        id="q1", buyer_id="b1", seller_id="s1", vehicle_id="v1", vehicle_name="Terra Explorer X",
        message="Colour?", status=QueryStatus.CLOSED, reply="Available in silver and green",
    )
    open_query = UserQuery(id="q2", buyer_id="b1", seller_id="s1", vehicle_id="v1", message="Price?")
    pending = Contract(id="c1", buyer_id="b1", seller_id="s1", vehicle_id="v1", vehicle_name="Terra", status=ContractStatus.PENDING)
    accepted = Contract(id="c2", buyer_id="b1", seller_id="s1", vehicle_id="v1", status=ContractStatus.ACCEPTED)

    notes = build_notifications([replied, open_query], [pending, accepted])
    assert [(note.type, note.target_id) for note in notes] == [("success", "q1"), ("info", "c1")]
    assert notes[0].message == 'Query Replied: Terra Explorer X - "Available in silver and green..."'


def test_buyer_activity_filters_by_status(session, make_user):
    buyer = make_user(UserRole.BUYER)
    _contract(session, buyer.id, "v1", ContractStatus.PENDING)
    _contract(session, buyer.id, "v2", ContractStatus.ACCEPTED)

    activity = ActivityService(db=session).for_buyer(buyer.id, contract_status=ContractStatus.ACCEPTED)
    assert [c.vehicle_id for c in activity.contracts] == ["v2"]
    assert len(activity.notifications) == 1
