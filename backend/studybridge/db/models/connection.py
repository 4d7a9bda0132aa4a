"""
Connection request model.
"""
import enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, Uuid

from ..base import Base, utcnow


class ConnectionStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"


class ConnectionRequest(Base):
    """
    A directed proposal from ``sender_id`` to ``receiver_id``.

    Rejected requests are deleted, so every stored row is active. The pair
    columns hold the two user ids in sorted order, which lets the unique
    constraint cover the unordered pair regardless of who sent the request.
    """
    __tablename__ = "connection_requests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sender_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    pair_low = Column(Uuid(as_uuid=True), nullable=False)
    pair_high = Column(Uuid(as_uuid=True), nullable=False)
    status = Column(String(20), nullable=False, default=ConnectionStatus.PENDING.value, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    responded_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint("pair_low", "pair_high", name="uq_connection_requests_pair"),
    )

    def __repr__(self):
        return f"<ConnectionRequest(id={self.id}, {self.sender_id}->{self.receiver_id}, status={self.status})>"
