"""
Authentication schemas for email/password registration and login.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from .user import UserRead, blank_to_none


class RegisterRequest(BaseModel):
    """Request model for registration."""
    name: str = Field(..., min_length=1, max_length=255, alias="username", description="Display name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")
    phone: Optional[str] = Field(None, max_length=32, description="Optional phone number")

    class Config:
        populate_by_name = True  # Accepts both name and username

    @field_validator("phone", mode="before")
    @classmethod
    def normalize_phone(cls, v: Any) -> Any:
        return blank_to_none(v)


class LoginRequest(BaseModel):
    """Request model for email/password login."""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class AuthResponse(BaseModel):
    """Response model for successful registration or login."""
    message: str = Field(..., description="Human-readable outcome")
    token: str = Field(..., description="Bearer token for authenticated requests")
    token_type: str = Field(default="bearer")
    expires_at: datetime = Field(..., description="Token expiration timestamp (UTC)")
    user: UserRead
