from __future__ import annotations

from app.core.schemas import ComplianceVerdict
from app.llm.client import LLMResponse
from app.llm.orchestrator import LLMOrchestrator


class DummyClient:
    def __init__(self, text: str = '{"satisfied": true, "reason": "ok"}') -> None:
        self.text = text

    def generate(self, request):
        return LLMResponse(
            text=self.text,
            model_name="dummy",
            prompt_hash="hash",
            latency_ms=3,
            generated_at="2026-02-14T00:00:00Z",
        )

    def generate_image(self, prompt, reference_image_b64=None):
        raise RuntimeError("image quota exhausted")


def test_llm_orchestrator_generate_ok():
    orchestrator = LLMOrchestrator(
        client=DummyClient(),
        prompt_registry={"prompt.key": lambda ctx: "hello world"},
    )
    result = orchestrator.generate("prompt.key", {"x": 1})
    assert result.validation_status == "ok"
    assert result.model_name == "dummy"
    assert result.ok


def test_llm_orchestrator_pre_validation_failure():
    orchestrator = LLMOrchestrator(
        client=DummyClient(),
        prompt_registry={"prompt.empty": lambda ctx: " "},
    )
    result = orchestrator.generate("prompt.empty", {})
    assert result.validation_status == "failed_pre_validation"
    assert result.failure_reason is not None


def test_structured_generation_strips_fences():
    orchestrator = LLMOrchestrator(client=DummyClient('```json\n{"satisfied": false, "reason": "no"}\n```'))
    fallback = ComplianceVerdict(satisfied=True, reason="fallback")
    verdict = orchestrator.generate_structured("contract.compliance", {}, ComplianceVerdict, fallback)
    assert verdict == ComplianceVerdict(satisfied=False, reason="no")


def test_structured_generation_returns_fallback_on_schema_mismatch():
    orchestrator = LLMOrchestrator(client=DummyClient('{"reason": "missing flag"}'))
    fallback = ComplianceVerdict(satisfied=True, reason="fallback")
    assert orchestrator.generate_structured("contract.compliance", {}, ComplianceVerdict, fallback) is fallback


def test_text_generation_fallback_on_empty_output():
    orchestrator = LLMOrchestrator(client=DummyClient("   "))
    assert orchestrator.generate_text("analytics.chat", {"question": "q", "data": {}}, fallback="later") == "later"


def test_image_failure_returns_none():
    orchestrator = LLMOrchestrator(client=DummyClient())
    assert orchestrator.generate_image("a red car") is None


def test_default_registry_renders_every_prompt():
    orchestrator = LLMOrchestrator(client=DummyClient())
    for key in orchestrator.prompt_registry:
        assert orchestrator.render(key, {}).strip()
