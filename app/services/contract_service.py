"""Contract lifecycle: drafting, revision round-trips, review and signing."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.exceptions import ComplianceWarning, ConflictError, ValidationError
from app.core.schemas import ComplianceVerdict
from app.database.seed import GENERIC_SELLER_ID
from app.models import Contract, ContractStatus, User, UserQuery, Vehicle
from app.orchestration.state_machine import CONTRACT_STATE_MACHINE
from app.services.base_service import BaseService
from app.services.contract_ai_service import ContractAIService
from app.services.signature_service import SignatureService, SimulatedSignatureService
from app.utils.ids import new_id
from app.utils.validators import sanitize_text

logger = logging.getLogger(__name__)

REVISION_REQUEST_TAG = "[CONTRACT REVISION REQUEST]"
ANALYSIS_QUESTION_TAG = "[Analysis Phase Question]:"
DEFAULT_REVISION_REQUEST = "General Revision"


class ContractService(BaseService):
    """Service for contract CRUD and lifecycle transitions."""

    def __init__(
        self,
        db: Session | None = None,
        ai: ContractAIService | None = None,
        signer: SignatureService | None = None,
    ) -> None:
        super().__init__(db=db)
        self.ai = ai or ContractAIService()
        self.signer = signer or SimulatedSignatureService()

    def get(self, contract_id: str) -> Contract:
        return self.get_or_raise(Contract, contract_id, "Contract")

    def list_for_buyer(self, buyer_id: str, status: ContractStatus | None = None) -> list[Contract]:
        stmt = select(Contract).where(Contract.buyer_id == buyer_id)
        if status is not None:
            stmt = stmt.where(Contract.status == status)
        return list(self.db.scalars(stmt.order_by(Contract.created_at.desc())))

    def list_for_seller(self, seller_id: str, status: ContractStatus | None = None) -> list[Contract]:
        """Contracts addressed to the seller, plus those drafted against unowned catalog vehicles."""
        stmt = select(Contract).where(Contract.seller_id.in_([seller_id, GENERIC_SELLER_ID]))
        if status is not None:
            stmt = stmt.where(Contract.status == status)
        return list(self.db.scalars(stmt.order_by(Contract.created_at.desc())))

    def draft(
        self,
        buyer: User,
        vehicle: Vehicle,
        buyer_inputs: dict[str, str],
        region: str | None = None,
    ) -> Contract:
        """Generate a filled contract for the buyer and store it as pending."""
        draft = self.ai.build_contract(vehicle.contract_template, vehicle, buyer_inputs)
        html = draft.final_contract_html
        if region and region != "General":
            html = self.ai.adapt_contract_to_jurisdiction(html, region)

        contract = Contract(
            id=new_id(),
            buyer_id=buyer.id,
            seller_id=vehicle.seller_id or GENERIC_SELLER_ID,
            vehicle_id=vehicle.id,
            vehicle_name=vehicle.name,
            contract_html=html,
            contract_summary=draft.summary,
            highlighted_clauses={},
            status=ContractStatus.PENDING,
            change_request_message="",
            seller_note="",
            revision=1,
        )
        self.db.add(contract)
        self.commit()
        self.db.refresh(contract)
        logger.info(
            "contract.drafted",
            extra={"event": "contract.drafted", "contract_id": contract.id, "vehicle_id": vehicle.id},
        )
        return contract

    def request_changes(
        self,
        contract_id: str,
        message: str,
        buyer_name: str = "",
        expected_revision: int | None = None,
        analysis_phase: bool = False,
    ) -> Contract:
        """Buyer asks for a revision; the seller inbox also receives a tagged query."""
        message = sanitize_text(message, max_len=4000)
        if not message:
            raise ValidationError("A change request message is required.")

        contract = self._load_for_write(contract_id, expected_revision)
        self._transition(contract, ContractStatus.NEEDS_CHANGES)
        contract.change_request_message = message

        tagged = f"{ANALYSIS_QUESTION_TAG} {message}" if analysis_phase else f"{REVISION_REQUEST_TAG} {message}"
        self.db.add(
            UserQuery(
                id=new_id(),
                buyer_id=contract.buyer_id,
                buyer_name=buyer_name,
                seller_id=contract.seller_id,
                vehicle_id=contract.vehicle_id,
                vehicle_name=contract.vehicle_name,
                message=tagged,
            )
        )
        return self._save(contract, "contract.changes_requested")

    def check_compliance(self, original_html: str, revised_html: str, request: str) -> ComplianceVerdict:
        return self.ai.verify_revision_compliance(original_html, revised_html, request or DEFAULT_REVISION_REQUEST)

    def submit_revision(
        self,
        contract_id: str,
        revised_html: str,
        seller_note: str | None = None,
        note_only: bool = False,
        confirm: bool = False,
        expected_revision: int | None = None,
    ) -> Contract:
        """
        Seller sends a revised document back to the buyer.

        Unless the submission is a note-only negotiation, the revision is
        compared against the buyer's request first. An unsatisfied verdict
        raises ComplianceWarning and writes nothing; resubmitting with
        ``confirm=True`` proceeds regardless of the verdict.
        """
        contract = self._load_for_write(contract_id, expected_revision)
        CONTRACT_STATE_MACHINE.assert_transition(contract.status.value, ContractStatus.PENDING.value)

        if not note_only:
            verdict = self.check_compliance(contract.contract_html, revised_html, contract.change_request_message)
            if not verdict.satisfied and not confirm:
                logger.info(
                    "contract.revision.compliance_warning",
                    extra={"event": "contract.revision.compliance_warning", "contract_id": contract_id},
                )
                raise ComplianceWarning(verdict.reason or "The revision may not satisfy the buyer's request.")

        self._transition(contract, ContractStatus.PENDING)
        contract.contract_html = sanitize_text(revised_html) or contract.contract_html
        contract.change_request_message = ""
        contract.seller_note = sanitize_text(seller_note, max_len=4000) if note_only else ""
        return self._save(contract, "contract.revision.submitted")

    def mark_reviewed(self, contract_id: str, region: str = "General") -> Contract:
        """
        Buyer's analysis step: store clause highlights.

        A contract awaiting the seller's revision keeps its status and change
        request; any other open contract is (re)affirmed as pending.
        """
        contract = self.get(contract_id)
        highlights = self.ai.highlight_clauses(contract.contract_html, region)
        if contract.status != ContractStatus.NEEDS_CHANGES:
            self._transition(contract, ContractStatus.PENDING)
        contract.highlighted_clauses = highlights.model_dump()
        return self._save(contract, "contract.reviewed")

    def sign(self, contract_id: str, signer_email: str, expected_revision: int | None = None) -> Contract:
        contract = self._load_for_write(contract_id, expected_revision)
        CONTRACT_STATE_MACHINE.assert_transition(contract.status.value, ContractStatus.ACCEPTED.value)

        receipt = self.signer.sign(contract.id, signer_email, contract.vehicle_id)
        self._transition(contract, ContractStatus.ACCEPTED)
        contract.signature_receipt = receipt.to_dict()
        return self._save(contract, "contract.signed")

    def reject(self, contract_id: str, expected_revision: int | None = None) -> Contract:
        contract = self._load_for_write(contract_id, expected_revision)
        self._transition(contract, ContractStatus.REJECTED)
        return self._save(contract, "contract.rejected")

    def delete(self, contract_id: str) -> None:
        contract = self.get(contract_id)
        self.db.delete(contract)
        self.commit()
        logger.info("contract.deleted", extra={"event": "contract.deleted", "contract_id": contract_id})

    def _load_for_write(self, contract_id: str, expected_revision: int | None) -> Contract:
        contract = self.get(contract_id)
        if expected_revision is not None and expected_revision != contract.revision:
            raise ConflictError(
                f"Contract {contract_id} is at revision {contract.revision}, not {expected_revision}."
            )
        return contract

    def _transition(self, contract: Contract, target: ContractStatus) -> None:
        CONTRACT_STATE_MACHINE.assert_transition(contract.status.value, target.value)
        if contract.status == ContractStatus.NEEDS_CHANGES and target == ContractStatus.PENDING:
            contract.change_request_message = ""
        contract.status = target

    def _save(self, contract: Contract, event: str) -> Contract:
        contract.revision += 1
        self.commit()
        self.db.refresh(contract)
        logger.info(
            event,
            extra={
                "event": event,
                "contract_id": contract.id,
                "status": contract.status.value,
                "revision": contract.revision,
            },
        )
        return contract
