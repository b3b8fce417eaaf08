"""SQLAlchemy model package for the marketplace schema."""

from app.models.base import Base
from app.models.contract import Contract
from app.models.enums import (
    ContractStatus,
    DriveType,
    InsuranceType,
    IntentCategory,
    QueryStatus,
    UserRole,
)
from app.models.saved_visual import SavedVisual
from app.models.usage_analytics import UsageAnalytics
from app.models.user import User
from app.models.user_query import UserQuery
from app.models.vehicle import Vehicle

__all__ = [
    "Base",
    "Contract",
    "ContractStatus",
    "DriveType",
    "InsuranceType",
    "IntentCategory",
    "QueryStatus",
    "SavedVisual",
    "UsageAnalytics",
    "User",
    "UserQuery",
    "UserRole",
    "Vehicle",
]
