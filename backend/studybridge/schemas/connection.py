"""
Pydantic schemas for connection requests.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from studybridge.db.models.connection import ConnectionStatus


class ConnectionRequestRead(BaseModel):
    """A connection request as seen by either participant."""
    id: int
    sender_id: UUID
    receiver_id: UUID
    status: ConnectionStatus
    created_at: datetime
    responded_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ConnectionActionResponse(BaseModel):
    message: str
    request: Optional[ConnectionRequestRead] = None
