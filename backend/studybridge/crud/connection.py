"""
CRUD operations for connection requests.
"""
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from studybridge.db.base import utcnow
from studybridge.db.models.connection import ConnectionRequest, ConnectionStatus
from studybridge.db.models.user import User


def normalize_pair(a: UUID, b: UUID) -> Tuple[UUID, UUID]:
    """Order two user ids so (a, b) and (b, a) map to the same key."""
    return (a, b) if str(a) <= str(b) else (b, a)


async def get_request(db: AsyncSession, request_id: int) -> Optional[ConnectionRequest]:
    # Conditional updates skip session sync, so reload any cached instance
    stmt = select(ConnectionRequest).where(ConnectionRequest.id == request_id).execution_options(populate_existing=True)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def get_active_between(db: AsyncSession, a: UUID, b: UUID) -> Optional[ConnectionRequest]:
    """
    Get the active request between two users, whichever of them sent it.
    """
    low, high = normalize_pair(a, b)
    result = await db.execute(
        select(ConnectionRequest).where(
            ConnectionRequest.pair_low == low,
            ConnectionRequest.pair_high == high,
        )
    )
    return result.scalar_one_or_none()


async def create_request(db: AsyncSession, sender_id: UUID, receiver_id: UUID) -> ConnectionRequest:
    """
    Insert a pending request.

    Raises:
        sqlalchemy.exc.IntegrityError: if an active request already exists
            for the pair (unique pair constraint).
    """
    low, high = normalize_pair(sender_id, receiver_id)
    db_request = ConnectionRequest(
        sender_id=sender_id,
        receiver_id=receiver_id,
        pair_low=low,
        pair_high=high,
        status=ConnectionStatus.PENDING.value,
    )
    db.add(db_request)
    await db.flush()
    await db.refresh(db_request)
    return db_request


async def accept_pending(db: AsyncSession, request_id: int, receiver_id: UUID) -> bool:
    """
    Conditionally move a pending request addressed to ``receiver_id`` to
    accepted.

    Returns:
        bool: True if a row was updated.
    """
    result = await db.execute(
        update(ConnectionRequest)
        .where(
            ConnectionRequest.id == request_id,
            ConnectionRequest.receiver_id == receiver_id,
            ConnectionRequest.status == ConnectionStatus.PENDING.value,
        )
        .values(status=ConnectionStatus.ACCEPTED.value, responded_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


async def delete_pending(db: AsyncSession, request_id: int, receiver_id: UUID) -> bool:
    """
    Conditionally delete a pending request addressed to ``receiver_id``.

    Returns:
        bool: True if a row was deleted.
    """
    result = await db.execute(
        delete(ConnectionRequest)
        .where(
            ConnectionRequest.id == request_id,
            ConnectionRequest.receiver_id == receiver_id,
            ConnectionRequest.status == ConnectionStatus.PENDING.value,
        )
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


async def list_for_user(
    db: AsyncSession,
    user_id: UUID,
    status: Optional[ConnectionStatus] = None,
) -> List[ConnectionRequest]:
    """
    List requests the user sent or received, newest first.
    """
    stmt = select(ConnectionRequest).where(
        or_(ConnectionRequest.sender_id == user_id, ConnectionRequest.receiver_id == user_id)
    )
    if status is not None:
        stmt = stmt.where(ConnectionRequest.status == status.value)
    result = await db.execute(stmt.order_by(ConnectionRequest.created_at.desc(), ConnectionRequest.id.desc()))
    return list(result.scalars().all())


async def list_friends(db: AsyncSession, user_id: UUID) -> List[User]:
    """
    List users joined to ``user_id`` through an accepted request in either
    direction.
    """
    stmt = (
        select(User)
        .join(
            ConnectionRequest,
            or_(
                and_(ConnectionRequest.sender_id == user_id, ConnectionRequest.receiver_id == User.id),
                and_(ConnectionRequest.receiver_id == user_id, ConnectionRequest.sender_id == User.id),
            ),
        )
        .where(ConnectionRequest.status == ConnectionStatus.ACCEPTED.value)
        .order_by(User.name)
    )
    result = await db.execute(stmt)
    return list(result.scalars().unique().all())
