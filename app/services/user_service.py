"""Account registration, login and profiles."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.auth.jwt import TokenPair, issue_session_tokens
from app.core.config import get_config
from app.core.exceptions import AuthenticationError, ConflictError, ValidationError
from app.core.schemas import AccountValidation
from app.core.security import hash_password, verify_password
from app.llm.orchestrator import LLMOrchestrator
from app.models import User, UserRole
from app.services.base_service import BaseService
from app.utils.ids import new_id
from app.utils.validators import registration_errors, sanitize_text

logger = logging.getLogger(__name__)

HIGH_RISK_THRESHOLD = 0.7
_PROFILE_FIELDS = ("name", "phone", "address", "interests", "dealership_name", "emp_id", "designation")


class AccountRejectedError(ValidationError):
    """Registration refused by the account risk check."""

    def __init__(self, message: str, validation: AccountValidation) -> None:
        super().__init__(message)
        self.validation = validation


class UserService(BaseService):
    def __init__(self, db: Session | None = None, orchestrator: LLMOrchestrator | None = None) -> None:
        super().__init__(db=db)
        self._orchestrator = orchestrator

    @property
    def orchestrator(self) -> LLMOrchestrator:
        if self._orchestrator is None:
            self._orchestrator = LLMOrchestrator()
        return self._orchestrator

    def get(self, user_id: str) -> User:
        return self.get_or_raise(User, user_id, "User")

    def get_by_email(self, email: str) -> User | None:
        return self.db.scalars(select(User).where(User.email == email.strip().lower())).first()

    def validate_account_creation(
        self, name: str, email: str, role: str, dealership_name: str | None
    ) -> AccountValidation:
        """AI risk review of a registration; an unavailable model lets it through."""
        return self.orchestrator.generate_structured(
            "account.validate",
            {"name": name, "email": email, "role": role, "dealership_name": dealership_name},
            AccountValidation,
            AccountValidation(is_valid=True, reasons=["AI Validation bypassed"], risk_score=0.0),
        )

    def register(
        self,
        name: str,
        email: str,
        password: str,
        role: UserRole,
        dealership_name: str | None = None,
    ) -> User:
        name = sanitize_text(name, max_len=255)
        email = sanitize_text(email, max_len=255).lower()
        if role == UserRole.ADMIN:
            raise ValidationError("Admin accounts cannot self-register.")
        if not name:
            raise ValidationError("Name is required.")
        errors = registration_errors(email, password, role.value, dealership_name)
        if errors:
            raise ValidationError(" ".join(errors))
        if self.get_by_email(email) is not None:
            raise ConflictError("This email is already linked to an existing account. Please log in.")

        validation = self.validate_account_creation(name, email, role.value, dealership_name)
        if not validation.is_valid:
            logger.info(
                "account.validation.rejected",
                extra={"event": "account.validation.rejected", "risk_score": validation.risk_score},
            )
            if validation.risk_score > HIGH_RISK_THRESHOLD:
                raise AccountRejectedError("Account rejected by AI Security Risk Assessment.", validation)
            raise AccountRejectedError("; ".join(validation.reasons) or "Registration details look invalid.", validation)

        cfg = get_config()
        user = User(
            id=new_id(),
            email=email,
            name=name,
            role=role,
            password_hash=hash_password(password, pepper=cfg.PASSWORD_PEPPER),
            dealership_name=sanitize_text(dealership_name, max_len=255) if role == UserRole.SELLER else None,
        )
        self.db.add(user)
        self.commit()
        self.db.refresh(user)
        logger.info("account.registered", extra={"event": "account.registered", "user_id": user.id, "role": role.value})
        return user

    def authenticate(self, email: str, password: str) -> User:
        user = self.get_by_email(email)
        cfg = get_config()
        if user is None or not verify_password(password, user.password_hash, pepper=cfg.PASSWORD_PEPPER):
            raise AuthenticationError("Invalid credentials.")
        return user

    def issue_tokens(self, user: User) -> TokenPair:
        return issue_session_tokens(user_id=user.id, role=user.role.value)

    def update_profile(self, user_id: str, data: dict[str, Any]) -> User:
        user = self.get(user_id)
        for key in _PROFILE_FIELDS:
            if key in data and data[key] is not None:
                setattr(user, key, sanitize_text(data[key], max_len=2000))
        self.commit()
        self.db.refresh(user)
        return user

    def ensure_admin(self, email: str, password: str) -> User:
        """Create the bootstrap admin account when it does not exist yet."""
        existing = self.get_by_email(email)
        if existing is not None:
            return existing
        cfg = get_config()
        user = User(
            id=new_id(),
            email=email.strip().lower(),
            name="Admin",
            role=UserRole.ADMIN,
            password_hash=hash_password(password, pepper=cfg.PASSWORD_PEPPER),
        )
        self.db.add(user)
        self.commit()
        self.db.refresh(user)
        logger.info("account.admin.created", extra={"event": "account.admin.created", "user_id": user.id})
        return user
