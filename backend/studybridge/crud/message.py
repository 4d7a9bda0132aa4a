"""
CRUD operations for direct messages.
"""
from typing import List
from uuid import UUID

from sqlalchemy import and_, or_, select, union
from sqlalchemy.ext.asyncio import AsyncSession

from studybridge.db.models.message import Message


async def create_message(db: AsyncSession, sender_id: UUID, receiver_id: UUID, content: str) -> Message:
    db_message = Message(sender_id=sender_id, receiver_id=receiver_id, content=content)
    db.add(db_message)
    await db.flush()
    await db.refresh(db_message)
    return db_message


async def list_conversation(db: AsyncSession, a: UUID, b: UUID) -> List[Message]:
    """
    Get every message exchanged between two users in creation order.

    Args:
        db: Database session
        a: One participant
        b: The other participant

    Returns:
        List[Message]: Messages ordered oldest first
    """
    stmt = (
        select(Message)
        .where(
            or_(
                and_(Message.sender_id == a, Message.receiver_id == b),
                and_(Message.sender_id == b, Message.receiver_id == a),
            )
        )
        .order_by(Message.created_at, Message.id)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_peer_ids(db: AsyncSession, user_id: UUID) -> List[UUID]:
    """
    Distinct ids of users that ``user_id`` has sent to or received from.
    """
    sent_to = select(Message.receiver_id.label("peer_id")).where(Message.sender_id == user_id)
    received_from = select(Message.sender_id.label("peer_id")).where(Message.receiver_id == user_id)
    result = await db.execute(union(sent_to, received_from))
    return [row.peer_id for row in result]
