from __future__ import annotations

from datetime import date

from app.database.seed import catalog_vehicles
from app.services.contract_ai_service import (
    ASSISTANT_UNAVAILABLE,
    COMPLIANCE_SKIPPED,
    DEFAULT_BUYER_FIELDS,
    TEMPLATE_ERROR,
    ContractAIService,
    prefill_buyer_fields,
    prefill_seller_fields,
)

DOCUMENT = "<h3>EV PURCHASE AGREEMENT</h3><p>The battery is sold with the vehicle (not leased).</p>"


def test_citation_kept_when_it_appears_in_document(scripted):
    service = ContractAIService(
        scripted({"contract.assistant": {"answer": "It is sold.", "citation_quote": "sold with the vehicle"}})
    )
    answer = service.query_contract_assistant("Is the battery leased?", DOCUMENT)
    assert answer.answer == "It is sold."
    assert answer.citation_quote == "sold with the vehicle"


def test_citation_dropped_when_not_verbatim(scripted):
    service = ContractAIService(
        scripted({"contract.assistant": {"answer": "It is sold.", "citation_quote": "battery is leased"}})
    )
    answer = service.query_contract_assistant("Is the battery leased?", DOCUMENT)
    assert answer.citation_quote == ""


def test_assistant_falls_back_on_malformed_output(scripted):
    service = ContractAIService(scripted({"contract.assistant": "not json at all"}))
    answer = service.query_contract_assistant("Anything?", DOCUMENT)
    assert answer.answer == ASSISTANT_UNAVAILABLE


def test_variables_fall_back_to_default_fields(scripted):
    service = ContractAIService(scripted({"contract.variables": {"fields": []}}))
    assert service.extract_contract_variables(None) == DEFAULT_BUYER_FIELDS

    service = ContractAIService(scripted({"contract.variables": '```json\n{"fields": ["PAN Number"]}\n```'}))
    assert service.extract_contract_variables("{{pan}}") == ["PAN Number"]


def test_compliance_unavailable_counts_as_satisfied(scripted):
    verdict = ContractAIService(scripted()).verify_revision_compliance("<p>a</p>", "<p>b</p>", "")
    assert verdict.satisfied is True
    assert verdict.reason == COMPLIANCE_SKIPPED


def test_compliance_prompt_receives_plain_text(scripted):
    orchestrator = scripted({"contract.compliance": {"satisfied": False, "reason": "Fee remains"}})
    verdict = ContractAIService(orchestrator).verify_revision_compliance("<p>Fee 5%</p>", "<b>Fee 5%</b>", "Drop fee")
    assert verdict.satisfied is False
    prompt = orchestrator.client.requests[0].prompt
    assert "<b>" not in prompt
    assert "Drop fee" in prompt


def test_template_and_refine_fallbacks(scripted):
    vehicle = catalog_vehicles()[0]
    service = ContractAIService(scripted())
    assert service.generate_seller_contract_template(vehicle, "Rao Motors") == TEMPLATE_ERROR
    assert service.refine_contract_text("<p>Original</p>", "shorter") == "<p>Original</p>"
    assert service.fill_seller_variables("<p>[VIN]</p>", {"VIN": "123"}) == "<p>[VIN]</p>"
    assert service.identify_seller_placeholders("<p>[VIN]</p>") == []


def test_prefill_helpers():
    vehicle = catalog_vehicles()[1]
    values = prefill_seller_fields(["Sale Date", "Final Price", "Vehicle Model", "VIN"], vehicle, today=date(2026, 3, 1))
    assert values == {
        "Sale Date": "2026-03-01",
        "Final Price": str(vehicle.price_low),
        "Vehicle Model": "CityGlider EV Urban Prime",
    }
    assert prefill_buyer_fields(["Full Legal Name", "Email", "Address"], "Asha", "asha@example.com") == {
        "Full Legal Name": "Asha",
        "Email": "asha@example.com",
    }
