"""
Pydantic schemas for direct messages.
"""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class MessageCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000, description="Message text")


class MessageRead(BaseModel):
    id: int
    sender_id: UUID
    receiver_id: UUID
    content: str
    created_at: datetime

    class Config:
        from_attributes = True
