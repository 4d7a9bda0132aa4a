"""
Block relation model.
"""
from sqlalchemy import Column, DateTime, ForeignKey, Uuid

from ..base import Base, utcnow


class Block(Base):
    """``blocker_id`` has blocked ``blocked_id``. One row per ordered pair."""
    __tablename__ = "blocks"

    blocker_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    blocked_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Block(blocker_id={self.blocker_id}, blocked_id={self.blocked_id})>"
