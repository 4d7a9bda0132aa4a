"""
CRUD operations for block relations.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from studybridge.db.models.block import Block
from studybridge.db.models.user import User


async def get_block(db: AsyncSession, blocker_id: UUID, blocked_id: UUID) -> Optional[Block]:
    result = await db.execute(
        select(Block).where(Block.blocker_id == blocker_id, Block.blocked_id == blocked_id)
    )
    return result.scalar_one_or_none()


async def exists_either_direction(db: AsyncSession, a: UUID, b: UUID) -> bool:
    """
    True if ``a`` blocked ``b`` or ``b`` blocked ``a``.
    """
    result = await db.execute(
        select(Block.blocker_id)
        .where(
            or_(
                and_(Block.blocker_id == a, Block.blocked_id == b),
                and_(Block.blocker_id == b, Block.blocked_id == a),
            )
        )
        .limit(1)
    )
    return result.first() is not None


async def create_block(db: AsyncSession, blocker_id: UUID, blocked_id: UUID) -> Block:
    """
    Insert a block row.

    Raises:
        sqlalchemy.exc.IntegrityError: if the ordered pair is already blocked.
    """
    db_block = Block(blocker_id=blocker_id, blocked_id=blocked_id)
    db.add(db_block)
    await db.flush()
    return db_block


async def delete_block(db: AsyncSession, blocker_id: UUID, blocked_id: UUID) -> bool:
    result = await db.execute(
        delete(Block)
        .where(Block.blocker_id == blocker_id, Block.blocked_id == blocked_id)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount > 0


async def list_blocked_users(db: AsyncSession, blocker_id: UUID) -> List[User]:
    result = await db.execute(
        select(User)
        .join(Block, Block.blocked_id == User.id)
        .where(Block.blocker_id == blocker_id)
        .order_by(Block.created_at)
    )
    return list(result.scalars().all())
