from __future__ import annotations

import random

from app.services.signature_service import BLOCK_NUMBER_RANGE, GAS_USED_RANGE, SimulatedSignatureService, registry_address


def test_receipt_fields_and_delay():
    slept = []
    service = SimulatedSignatureService(delay_seconds=2.5, sleep=slept.append, rng=random.Random(7))
    receipt = service.sign("c1", "asha@example.com", "v2")

    assert slept == [2.5]
    assert receipt.tx_hash.startswith("0x") and len(receipt.tx_hash) == 66
    assert BLOCK_NUMBER_RANGE[0] <= receipt.block_number < BLOCK_NUMBER_RANGE[1]
    assert GAS_USED_RANGE[0] <= receipt.gas_used < GAS_USED_RANGE[1]
    assert receipt.contract_address == registry_address()
    assert len(receipt.contract_address) == 42
    assert set(receipt.to_dict()) == {"tx_hash", "block_number", "timestamp", "gas_used", "contract_address"}


def test_same_contract_signed_twice_gets_different_hashes():
    service = SimulatedSignatureService(delay_seconds=0, sleep=lambda _: None)
    first = service.sign("c1", "asha@example.com", "v2")
    second = service.sign("c1", "asha@example.com", "v2")
    assert first.tx_hash != second.tx_hash


def test_zero_delay_does_not_sleep():
    def _fail(_):
        raise AssertionError("should not sleep")

    SimulatedSignatureService(delay_seconds=0, sleep=_fail).sign("c1", "a@example.com", "v1")
