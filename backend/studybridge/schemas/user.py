"""
Pydantic schemas for users and profiles.
"""
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator


def blank_to_none(value: Any) -> Any:
    """Treat empty or whitespace-only strings as an absent value."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class UserPublic(BaseModel):
    """Directory view of a user, without contact details."""
    id: UUID
    name: str
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    college: Optional[str] = None
    bio: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class UserRead(UserPublic):
    """View of a user for authenticated callers. Never includes the credential hash."""
    email: EmailStr
    phone: Optional[str] = None


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own profile. Omitted fields are left as-is."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = Field(None, max_length=32)
    city: Optional[str] = Field(None, max_length=255)
    state: Optional[str] = Field(None, max_length=255)
    country: Optional[str] = Field(None, max_length=255)
    college: Optional[str] = Field(None, max_length=255)
    bio: Optional[str] = None

    @field_validator('name')
    @classmethod
    def name_not_null(cls, v: Optional[str]) -> str:
        # Omitted is fine; an explicit null would clear a required column
        if v is None:
            raise ValueError('name cannot be null')
        return v

    @field_validator('phone', mode='before')
    @classmethod
    def normalize_phone(cls, v: Any) -> Any:
        return blank_to_none(v)


class UserSearchParams(BaseModel):
    city: Optional[str] = None
    country: Optional[str] = None
    state: Optional[str] = None
    college: Optional[str] = None
