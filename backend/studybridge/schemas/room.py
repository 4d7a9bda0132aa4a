"""
Pydantic schemas for chat rooms.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class RoomCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)


class RoomRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    created_by: Optional[UUID] = None
    created_at: datetime

    class Config:
        from_attributes = True


class RoomMessageCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)


class RoomMessageRead(BaseModel):
    id: int
    room_id: int
    sender_id: UUID
    content: str
    created_at: datetime

    class Config:
        from_attributes = True
