"""Pydantic schema package for API contracts."""

from app.schemas.analytics import ActivityResponse, DashboardResponse, NotificationResponse
from app.schemas.auth import (
    LoginRequest,
    ProfileUpdateRequest,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
    TokenClaims,
    TokenResponse,
    UserResponse,
)
from app.schemas.contracts import ContractDraftRequest, ContractResponse, ContractRevisionRequest
from app.schemas.matching import MatchRequest, MatchResponse
from app.schemas.queries import QueryResponse, QuerySendRequest
from app.schemas.vehicles import InsurancePlanSchema, VehicleCreateRequest, VehicleResponse
from app.schemas.visuals import SavedVisualResponse, VisualGenerateRequest

__all__ = [
    "ActivityResponse",
    "ContractDraftRequest",
    "ContractResponse",
    "ContractRevisionRequest",
    "DashboardResponse",
    "InsurancePlanSchema",
    "LoginRequest",
    "MatchRequest",
    "MatchResponse",
    "NotificationResponse",
    "ProfileUpdateRequest",
    "QueryResponse",
    "QuerySendRequest",
    "RefreshRequest",
    "RegisterRequest",
    "RegisterResponse",
    "SavedVisualResponse",
    "TokenClaims",
    "TokenResponse",
    "UserResponse",
    "VehicleCreateRequest",
    "VehicleResponse",
    "VisualGenerateRequest",
]
