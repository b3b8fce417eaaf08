"""Signature receipts for accepted contracts.

``SimulatedSignatureService`` is a placeholder: it hashes the signing
identifiers with the current time and fabricates block and gas numbers. It
does not talk to any ledger. A real signing or timestamping backend only has
to implement ``SignatureService.sign``.
"""

from __future__ import annotations

import hashlib
import logging
import random
import time
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Callable, Protocol

from app.core.config import get_config

logger = logging.getLogger(__name__)

REGISTRY_SEED = "TeckionSmartContractRegistry_v1"
BLOCK_NUMBER_RANGE = (18_000_000, 18_100_000)
GAS_USED_RANGE = (21_000, 71_000)


@dataclass(frozen=True)
class SignatureReceipt:
    tx_hash: str
    block_number: int
    timestamp: str
    gas_used: int
    contract_address: str

    def to_dict(self) -> dict:
        return asdict(self)


class SignatureService(Protocol):
    def sign(self, contract_id: str, signer: str, vehicle_id: str) -> SignatureReceipt: ...


def registry_address() -> str:
    return ("0x" + hashlib.sha256(REGISTRY_SEED.encode("utf-8")).hexdigest())[:42]


class SimulatedSignatureService:
    """Hash-based stand-in for a signing backend."""

    def __init__(
        self,
        delay_seconds: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self.delay_seconds = get_config().SIGNATURE_DELAY_SECONDS if delay_seconds is None else delay_seconds
        self._sleep = sleep
        self._rng = rng or random.Random()

    def sign(self, contract_id: str, signer: str, vehicle_id: str) -> SignatureReceipt:
        if self.delay_seconds > 0:
            self._sleep(self.delay_seconds)

        payload = f"{contract_id}-{signer}-{vehicle_id}-{time.time_ns()}"
        receipt = SignatureReceipt(
            tx_hash="0x" + hashlib.sha256(payload.encode("utf-8")).hexdigest(),
            block_number=self._rng.randrange(*BLOCK_NUMBER_RANGE),
            timestamp=datetime.now(timezone.utc).isoformat(),
            gas_used=self._rng.randrange(*GAS_USED_RANGE),
            contract_address=registry_address(),
        )
        logger.info(
            "signature.receipt.issued",
            extra={"event": "signature.receipt.issued", "contract_id": contract_id, "tx_hash": receipt.tx_hash},
        )
        return receipt
