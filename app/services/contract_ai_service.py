"""AI collaborators for contract drafting, review and revision checks.

Every method returns a usable value: failed, empty or malformed model output
is replaced by the fallback documented on the method.
"""

from __future__ import annotations

import logging
from datetime import date

from app.core.schemas import (
    AssistantAnswer,
    ClauseHighlights,
    ComplianceVerdict,
    ContractDraft,
    ContractVariables,
    SellerPlaceholders,
)
from app.llm.orchestrator import LLMOrchestrator
from app.models import Vehicle
from app.utils.validators import strip_code_fences, strip_markup

logger = logging.getLogger(__name__)

DEFAULT_BUYER_FIELDS = ["Full Legal Name", "Current Address"]
DEFAULT_TEMPLATE = "Standard Agreement: {{buyer_name}} buys {{vehicle_name}}."
DRAFT_ERROR_HTML = "<p>Error generating contract.</p>"
DRAFT_ERROR_SUMMARY = "Generation failed."
TEMPLATE_ERROR = "Error generating template."
ASSISTANT_UNAVAILABLE = "I couldn't analyze the document at this moment."
COMPLIANCE_SKIPPED = "AI Verification Skipped."


def vehicle_context(vehicle: Vehicle) -> dict:
    return {
        "name": vehicle.name,
        "trim": vehicle.trim,
        "drive": vehicle.drive,
        "price": vehicle.price_low,
    }


def prefill_seller_fields(fields: list[str], vehicle: Vehicle, today: date | None = None) -> dict[str, str]:
    """Obvious seller placeholder values derived from the vehicle."""
    today = today or date.today()
    values: dict[str, str] = {}
    for label in fields:
        lowered = label.lower()
        if "date" in lowered:
            values[label] = today.isoformat()
        elif "price" in lowered:
            values[label] = str(vehicle.price_low)
        elif "model" in lowered or "vehicle" in lowered:
            values[label] = f"{vehicle.name} {vehicle.trim}".strip()
    return values


def prefill_buyer_fields(fields: list[str], name: str, email: str) -> dict[str, str]:
    values: dict[str, str] = {}
    for label in fields:
        lowered = label.lower()
        if "name" in lowered:
            values[label] = name
        elif "email" in lowered:
            values[label] = email
    return values


def plain_text(document: str) -> str:
    return " ".join(strip_markup(document).split())


class ContractAIService:
    def __init__(self, orchestrator: LLMOrchestrator | None = None) -> None:
        self.orchestrator = orchestrator or LLMOrchestrator()

    def extract_contract_variables(self, template: str | None) -> list[str]:
        """Buyer-supplied field labels; falls back to name and address."""
        result = self.orchestrator.generate_structured(
            "contract.variables",
            {"template": template or DEFAULT_TEMPLATE},
            ContractVariables,
            ContractVariables(fields=list(DEFAULT_BUYER_FIELDS)),
        )
        return result.fields or list(DEFAULT_BUYER_FIELDS)

    def identify_seller_placeholders(self, template: str) -> list[str]:
        result = self.orchestrator.generate_structured(
            "contract.seller_placeholders",
            {"template": template},
            SellerPlaceholders,
            SellerPlaceholders(),
        )
        return result.seller_fields

    def fill_seller_variables(self, template: str, seller_inputs: dict[str, str]) -> str:
        text = self.orchestrator.generate_text(
            "contract.fill_seller",
            {"template": template, "seller_inputs": seller_inputs},
            fallback=template,
        )
        return strip_code_fences(text) or template

    def build_contract(self, template: str | None, vehicle: Vehicle, buyer_inputs: dict[str, str]) -> ContractDraft:
        """Fill a template with buyer details; error HTML and summary on failure."""
        return self.orchestrator.generate_structured(
            "contract.build",
            {
                "template": template or DEFAULT_TEMPLATE,
                "vehicle": vehicle_context(vehicle),
                "buyer_inputs": buyer_inputs,
            },
            ContractDraft,
            ContractDraft(final_contract_html=DRAFT_ERROR_HTML, summary=DRAFT_ERROR_SUMMARY),
        )

    def adapt_contract_to_jurisdiction(self, contract_html: str, region: str) -> str:
        text = self.orchestrator.generate_text(
            "contract.jurisdiction",
            {"contract_html": contract_html, "region": region},
            fallback=contract_html,
        )
        return strip_code_fences(text) or contract_html

    def highlight_clauses(self, contract_text: str, region: str = "General") -> ClauseHighlights:
        return self.orchestrator.generate_structured(
            "contract.highlight",
            {"contract_text": plain_text(contract_text), "region": region},
            ClauseHighlights,
            ClauseHighlights(),
        )

    def generate_seller_contract_template(
        self, vehicle: Vehicle, dealership_name: str | None, region: str = "General"
    ) -> str:
        text = self.orchestrator.generate_text(
            "contract.seller_template",
            {"vehicle": vehicle_context(vehicle), "dealership_name": dealership_name, "region": region},
            fallback=TEMPLATE_ERROR,
        )
        return strip_code_fences(text) or TEMPLATE_ERROR

    def refine_contract_text(self, current_text: str, instruction: str) -> str:
        text = self.orchestrator.generate_text(
            "contract.refine",
            {"current_text": current_text, "instruction": instruction},
            fallback=current_text,
        )
        return strip_code_fences(text) or current_text

    def query_contract_assistant(self, question: str, document: str) -> AssistantAnswer:
        """
        Answer a buyer question about a contract.

        The citation is kept only when it occurs verbatim in the plain text of
        the document, so callers can highlight it safely.
        """
        text = plain_text(document)
        answer = self.orchestrator.generate_structured(
            "contract.assistant",
            {"question": question, "contract_text": text},
            AssistantAnswer,
            AssistantAnswer(answer=ASSISTANT_UNAVAILABLE, citation_quote=""),
        )
        quote = answer.citation_quote.strip()
        if quote and quote not in text:
            logger.info(
                "contract.assistant.citation_dropped",
                extra={"event": "contract.assistant.citation_dropped", "quote_length": len(quote)},
            )
            quote = ""
        return answer.model_copy(update={"citation_quote": quote})

    def verify_revision_compliance(self, original_html: str, revised_html: str, request: str) -> ComplianceVerdict:
        """Advisory check; an unavailable model counts as satisfied."""
        return self.orchestrator.generate_structured(
            "contract.compliance",
            {
                "original_text": plain_text(original_html),
                "revised_text": plain_text(revised_html),
                "request": request or "General Revision",
            },
            ComplianceVerdict,
            ComplianceVerdict(satisfied=True, reason=COMPLIANCE_SKIPPED),
        )
