"""
CRUD operations for chat rooms.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from studybridge.db.models.room import Room, RoomMember, RoomMessage
from studybridge.db.models.user import User


async def get_room(db: AsyncSession, room_id: int) -> Optional[Room]:
    result = await db.execute(select(Room).where(Room.id == room_id))
    return result.scalar_one_or_none()


async def get_by_name(db: AsyncSession, name: str) -> Optional[Room]:
    result = await db.execute(select(Room).where(Room.name == name))
    return result.scalar_one_or_none()


async def create_room(db: AsyncSession, name: str, description: Optional[str], created_by: UUID) -> Room:
    db_room = Room(name=name, description=description, created_by=created_by)
    db.add(db_room)
    await db.flush()
    await db.refresh(db_room)
    return db_room


async def list_rooms(db: AsyncSession) -> List[Room]:
    result = await db.execute(select(Room).order_by(Room.name))
    return list(result.scalars().all())


async def get_membership(db: AsyncSession, room_id: int, user_id: UUID) -> Optional[RoomMember]:
    result = await db.execute(
        select(RoomMember).where(RoomMember.room_id == room_id, RoomMember.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def add_member(db: AsyncSession, room_id: int, user_id: UUID) -> RoomMember:
    member = RoomMember(room_id=room_id, user_id=user_id)
    db.add(member)
    await db.flush()
    return member


async def remove_member(db: AsyncSession, room_id: int, user_id: UUID) -> bool:
    result = await db.execute(
        delete(RoomMember)
        .where(RoomMember.room_id == room_id, RoomMember.user_id == user_id)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount > 0


async def list_member_ids(db: AsyncSession, room_id: int) -> List[UUID]:
    result = await db.execute(select(RoomMember.user_id).where(RoomMember.room_id == room_id))
    return list(result.scalars().all())


async def list_members(db: AsyncSession, room_id: int) -> List[User]:
    result = await db.execute(
        select(User)
        .join(RoomMember, RoomMember.user_id == User.id)
        .where(RoomMember.room_id == room_id)
        .order_by(RoomMember.joined_at)
    )
    return list(result.scalars().all())


async def create_room_message(db: AsyncSession, room_id: int, sender_id: UUID, content: str) -> RoomMessage:
    db_message = RoomMessage(room_id=room_id, sender_id=sender_id, content=content)
    db.add(db_message)
    await db.flush()
    await db.refresh(db_message)
    return db_message


async def list_room_messages(db: AsyncSession, room_id: int) -> List[RoomMessage]:
    result = await db.execute(
        select(RoomMessage)
        .where(RoomMessage.room_id == room_id)
        .order_by(RoomMessage.created_at, RoomMessage.id)
    )
    return list(result.scalars().all())
