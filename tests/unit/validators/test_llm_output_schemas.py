from __future__ import annotations

import pytest

from app.core.schemas import AccountValidation, ClauseHighlights, ContractDraft, parse_schema


def test_contract_draft_requires_html():
    with pytest.raises(ValueError):
        parse_schema(ContractDraft, '{"summary": "no body"}')
    draft = parse_schema(ContractDraft, '{"final_contract_html": "<p>x</p>"}')
    assert draft.summary == "Draft"


def test_account_validation_clamps_risk():
    validation = parse_schema(AccountValidation, '{"is_valid": false, "risk_score": 7, "reasons": ["a", 3]}')
    assert validation.risk_score == 1.0
    assert validation.reasons == ["a", "3"]


def test_clause_highlights_defaults():
    highlights = parse_schema(ClauseHighlights, '{"obligations": "not a list"}')
    assert highlights.obligations == []
    assert highlights.risk_level == "Unknown"


def test_non_object_payload_rejected():
    with pytest.raises(ValueError):
        parse_schema(ClauseHighlights, '["a"]')


def test_account_validation_treats_nan_risk_as_zero():
    validation = parse_schema(AccountValidation, '{"is_valid": true, "risk_score": "NaN"}')
    assert validation.risk_score == 0.0
    assert parse_schema(AccountValidation, '{"risk_score": "Infinity"}').risk_score == 1.0
