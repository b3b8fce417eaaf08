"""LLM package for orchestration, prompting, and validation."""

from app.llm.client import LLMClient, LLMRequest, LLMResponse
from app.llm.orchestrator import LLMOrchestrator, LLMResult

__all__ = ["LLMClient", "LLMRequest", "LLMResponse", "LLMOrchestrator", "LLMResult"]
