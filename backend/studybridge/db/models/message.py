"""
Direct message model.
"""
from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, Text, Uuid

from ..base import Base, utcnow


class Message(Base):
    """
    A direct message between two users. Immutable once created.
    """
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sender_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_messages_conversation", "sender_id", "receiver_id", "created_at"),
    )

    def __repr__(self):
        return f"<Message(id={self.id}, from={self.sender_id}, to={self.receiver_id})>"
