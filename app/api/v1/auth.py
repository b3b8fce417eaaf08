"""Auth and account endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from app.api.v1._authz import DOMAIN_ERRORS, authorize_request, load_actor, to_http_error
from app.auth.jwt import REFRESH, verify_session_token
from app.core.dependencies import get_db_session, get_orchestrator
from app.core.exceptions import AuthenticationError, NotFoundError
from app.llm.orchestrator import LLMOrchestrator
from app.models import UserRole
from app.schemas.auth import (
    LoginRequest,
    ProfileUpdateRequest,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserResponse,
)
from app.services.contract_service import ContractService
from app.services.user_service import AccountRejectedError, UserService

router = APIRouter(prefix="/auth", tags=["auth"])


def _token_response(tokens) -> TokenResponse:
    return TokenResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        token_type=tokens.token_type,
    )


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db_session),
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
) -> RegisterResponse:
    service = UserService(db=db, orchestrator=orchestrator)
    try:
        user = service.register(
            name=payload.name,
            email=payload.email,
            password=payload.password,
            role=UserRole(payload.role),
            dealership_name=payload.dealership_name,
        )
    except AccountRejectedError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": str(exc),
                "reasons": exc.validation.reasons,
                "risk_score": exc.validation.risk_score,
                "recommended_fix": exc.validation.recommended_fix,
            },
        ) from exc
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc

    return RegisterResponse(
        user=UserResponse.model_validate(user),
        tokens=_token_response(service.issue_tokens(user)),
    )


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db_session)) -> TokenResponse:
    service = UserService(db=db)
    try:
        user = service.authenticate(payload.email, payload.password)
    except AuthenticationError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    return _token_response(service.issue_tokens(user))


@router.post("/refresh", response_model=TokenResponse)
def refresh(payload: RefreshRequest, db: Session = Depends(get_db_session)) -> TokenResponse:
    try:
        claims = verify_session_token(payload.refresh_token, REFRESH)
    except AuthenticationError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc

    service = UserService(db=db)
    try:
        user = service.get(str(claims["sub"]))
    except (KeyError, NotFoundError) as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account no longer exists.") from exc
    return _token_response(service.issue_tokens(user))


@router.get("/me", response_model=UserResponse)
def read_profile(
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> UserResponse:
    current = authorize_request(authorization, ["profile.read"])
    return UserResponse.model_validate(load_actor(db, current))


@router.patch("/me", response_model=UserResponse)
def update_profile(
    payload: ProfileUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> UserResponse:
    current = authorize_request(authorization, ["profile.write"])
    load_actor(db, current)
    user = UserService(db=db).update_profile(current.user_id, payload.model_dump(exclude_none=True))
    return UserResponse.model_validate(user)


@router.get("/users/{user_id}", response_model=UserResponse)
def read_buyer_profile(
    user_id: str,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> UserResponse:
    """Sellers may view buyers who have a contract with them."""
    current = authorize_request(authorization, ["buyers.read"])
    actor = load_actor(db, current)
    try:
        user = UserService(db=db).get(user_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc

    if actor.role != UserRole.ADMIN:
        buyer_ids = {contract.buyer_id for contract in ContractService(db=db).list_for_seller(actor.id)}
        if user.id not in buyer_ids:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="No contract with this buyer.")
    return UserResponse.model_validate(user)
