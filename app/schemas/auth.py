"""Auth and account schema module."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import UserRole


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(max_length=256)
    role: Literal["buyer", "seller"] = "buyer"
    dealership_name: str | None = Field(default=None, max_length=255)


class LoginRequest(BaseModel):
    email: str
    password: str = Field(min_length=1, max_length=256)


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshRequest(BaseModel):
    refresh_token: str


class TokenClaims(BaseModel):
    sub: str
    role: str
    permissions_version: int = 1
    exp: int
    iat: int
    jti: str
    token_use: str


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    role: UserRole
    phone: str | None = None
    address: str | None = None
    interests: str | None = None
    dealership_name: str | None = None
    emp_id: str | None = None
    designation: str | None = None
    created_at: datetime | None = None


class ProfileUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    phone: str | None = Field(default=None, max_length=64)
    address: str | None = Field(default=None, max_length=2000)
    interests: str | None = Field(default=None, max_length=2000)
    dealership_name: str | None = Field(default=None, max_length=255)
    emp_id: str | None = Field(default=None, max_length=64)
    designation: str | None = Field(default=None, max_length=255)


class RegisterResponse(BaseModel):
    user: UserResponse
    tokens: TokenResponse
