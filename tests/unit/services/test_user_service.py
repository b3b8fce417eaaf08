from __future__ import annotations

import pytest

from app.core.exceptions import AuthenticationError, ConflictError, ValidationError
from app.models import UserRole
from app.services.user_service import AccountRejectedError, UserService


def test_register_and_authenticate(session, scripted):
    service = UserService(db=session, orchestrator=scripted())
    user = service.register("Asha Rao", "Asha@Example.com", "secret123", UserRole.BUYER)
    assert user.email == "asha@example.com"
    assert user.dealership_name is None

    assert service.authenticate("asha@example.com", "secret123").id == user.id
    with pytest.raises(AuthenticationError):
        service.authenticate("asha@example.com", "wrong-pass")


def test_register_rejects_duplicate_email(session, scripted):
    service = UserService(db=session, orchestrator=scripted())
    service.register("Asha", "asha@example.com", "secret123", UserRole.BUYER)
    with pytest.raises(ConflictError):
        service.register("Asha Again", "ASHA@example.com", "secret123", UserRole.BUYER)


def test_register_runs_deterministic_checks_before_ai(session, scripted):
    orchestrator = scripted()
    service = UserService(db=session, orchestrator=orchestrator)
    with pytest.raises(ValidationError) as exc:
        service.register("Ravi", "not-an-email", "123", UserRole.SELLER, dealership_name="RM")
    message = str(exc.value)
    assert "email" in message
    assert "password" in message
    assert "Dealership" in message
    assert orchestrator.client.requests == []


def test_admin_cannot_self_register(session, scripted):
    with pytest.raises(ValidationError):
        UserService(db=session, orchestrator=scripted()).register("Root", "root@example.com", "secret123", UserRole.ADMIN)


def test_high_risk_registration_rejected(session, scripted):
    verdict = {"is_valid": False, "reasons": ["Disposable email"], "risk_score": 0.9, "recommended_fix": "Use work email"}
    service = UserService(db=session, orchestrator=scripted({"account.validate": verdict}))
    with pytest.raises(AccountRejectedError) as exc:
        service.register("Spam", "spam@example.com", "secret123", UserRole.SELLER, dealership_name="Spam Cars")
    assert str(exc.value) == "Account rejected by AI Security Risk Assessment."
    assert exc.value.validation.recommended_fix == "Use work email"


def test_low_risk_invalid_registration_reports_reasons(session, scripted):
    verdict = {"is_valid": False, "reasons": ["Name looks fake"], "risk_score": 0.3}
    service = UserService(db=session, orchestrator=scripted({"account.validate": verdict}))
    with pytest.raises(AccountRejectedError, match="Name looks fake"):
        service.register("Xx", "xx@example.com", "secret123", UserRole.BUYER)


def test_seller_keeps_dealership_and_profile_update(session, scripted):
    service = UserService(db=session, orchestrator=scripted())
    seller = service.register("Ravi", "ravi@example.com", "secret123", UserRole.SELLER, dealership_name="Rao Motors")
    assert seller.dealership_name == "Rao Motors"

    updated = service.update_profile(seller.id, {"phone": "+91 98450 00000", "designation": "Owner", "role": "admin"})
    assert updated.phone == "+91 98450 00000"
    assert updated.role == UserRole.SELLER


def test_ensure_admin_is_idempotent(session):
    service = UserService(db=session)
    first = service.ensure_admin("admin@example.com", "adminpass")
    second = service.ensure_admin("ADMIN@example.com", "adminpass")
    assert first.id == second.id
    assert first.role == UserRole.ADMIN
