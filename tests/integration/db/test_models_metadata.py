from __future__ import annotations

from app.models import Base
import app.models  # noqa: F401


def test_model_metadata_contains_marketplace_tables():
    expected = {"users", "vehicles", "contracts", "queries", "saved_visuals", "usage_analytics"}
    assert expected == set(Base.metadata.tables.keys())


def test_contract_table_carries_revision_column():
    columns = Base.metadata.tables["contracts"].columns
    assert "revision" in columns
    assert "signature_receipt" in columns
