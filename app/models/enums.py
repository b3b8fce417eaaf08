"""Canonical enum values for the marketplace schema."""

from __future__ import annotations

import enum


class UserRole(str, enum.Enum):
    BUYER = "buyer"
    SELLER = "seller"
    ADMIN = "admin"


class ContractStatus(str, enum.Enum):
    PENDING = "pending"
    REVIEWED = "reviewed"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    NEEDS_CHANGES = "needs_changes"


class QueryStatus(str, enum.Enum):
    OPEN = "open"
    CLOSED = "closed"


class DriveType(str, enum.Enum):
    FWD = "FWD"
    RWD = "RWD"
    AWD = "AWD"
    FOUR_WD = "4WD"


class IntentCategory(str, enum.Enum):
    FAMILY = "Family"
    CITY_COMMUTE = "City Commute"
    TREKKING = "Trekking"
    LUXURY_PREFERENCE = "Luxury Preference"
    BUDGET_CONSTRAINED = "Budget-Constrained"
    SAFETY_FIRST = "Safety-First"


class InsuranceType(str, enum.Enum):
    COMPREHENSIVE = "Comprehensive"
    THIRD_PARTY = "Third-Party"
    ZERO_DEP = "Zero-Dep"
    PAY_AS_YOU_DRIVE = "Pay-As-You-Drive"


TERMINAL_CONTRACT_STATUSES = frozenset({ContractStatus.ACCEPTED, ContractStatus.REJECTED})
