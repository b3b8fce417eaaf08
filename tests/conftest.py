from __future__ import annotations

import json
import os

os.environ["SIGNATURE_DELAY_SECONDS"] = "0"
os.environ["GEMINI_API_KEY"] = ""
os.environ["API_KEY"] = ""

from dataclasses import dataclass, field

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.auth.jwt import issue_session_tokens
from app.core.security import hash_password
from app.llm.client import LLMResponse
from app.llm.orchestrator import LLMOrchestrator
from app.models import Base, User, UserRole
from app.utils.ids import new_id


class ScriptedClient:
    """LLM client double that answers per prompt key."""

    def __init__(self, responses: dict | None = None, image=None) -> None:
        self.responses = dict(responses or {})
        self.image = image
        self.requests = []
        self.image_prompts = []

    def generate(self, request):
        self.requests.append(request)
        reply = self.responses.get(request.prompt_key, "")
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            reply = reply(request)
        if not isinstance(reply, str):
            reply = json.dumps(reply)
        return LLMResponse(
            text=reply,
            model_name="scripted",
            prompt_hash="hash",
            latency_ms=1,
            generated_at="2026-01-01T00:00:00Z",
        )

    def generate_image(self, prompt, reference_image_b64=None):
        self.image_prompts.append((prompt, reference_image_b64))
        if callable(self.image):
            return self.image(prompt)
        return self.image

    def keys(self) -> list[str]:
        return [request.prompt_key for request in self.requests]


@pytest.fixture
def session_factory():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def scripted():
    def _build(responses: dict | None = None, image=None) -> LLMOrchestrator:
        return LLMOrchestrator(client=ScriptedClient(responses, image))

    return _build


def add_user(db, role: UserRole = UserRole.BUYER, email: str | None = None, name: str = "Asha Rao", **extra) -> User:
    user = User(
        id=new_id(),
        email=email or f"{role.value}_{new_id()[:8]}@example.com",
        name=name,
        role=role,
        password_hash=hash_password("secret123"),
        **extra,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def make_user(session):
    def _make(role: UserRole = UserRole.BUYER, **kwargs) -> User:
        return add_user(session, role=role, **kwargs)

    return _make


def auth_header(user: User) -> dict[str, str]:
    token = issue_session_tokens(user_id=user.id, role=user.role.value).access_token
    return {"Authorization": f"Bearer {token}"}


@dataclass
class ApiHarness:
    client: object
    session_factory: object
    llm: ScriptedClient = field(default_factory=ScriptedClient)

    def user(self, role: UserRole = UserRole.BUYER, **kwargs) -> tuple[User, dict[str, str]]:
        db = self.session_factory()
        try:
            user = add_user(db, role=role, **kwargs)
        finally:
            db.close()
        return user, auth_header(user)


@pytest.fixture
def api(session_factory):
    from fastapi.testclient import TestClient

    from app.core.dependencies import get_db_session, get_orchestrator, get_signature_service
    from app.main import create_app
    from app.services.signature_service import SimulatedSignatureService

    application = create_app()
    harness = ApiHarness(client=None, session_factory=session_factory)

    def _db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    application.dependency_overrides[get_db_session] = _db
    application.dependency_overrides[get_orchestrator] = lambda: LLMOrchestrator(client=harness.llm)
    application.dependency_overrides[get_signature_service] = lambda: SimulatedSignatureService(delay_seconds=0)
    harness.client = TestClient(application)
    return harness
