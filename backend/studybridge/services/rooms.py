"""
Chat rooms with membership-gated posting.
"""
import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from studybridge.core.errors import Conflict, Forbidden, NotFound
from studybridge.crud import room as room_crud
from studybridge.db.models.room import Room, RoomMessage
from studybridge.db.models.user import User

logger = logging.getLogger(__name__)


class RoomService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_room(self, creator_id: UUID, name: str, description: Optional[str] = None) -> Room:
        """
        Create a room; the creator becomes its first member.

        Raises:
            Conflict: if a room with this name exists.
        """
        if await room_crud.get_by_name(self.db, name) is not None:
            raise Conflict("A room with this name already exists")

        try:
            room = await room_crud.create_room(self.db, name, description, creator_id)
        except IntegrityError:
            await self.db.rollback()
            raise Conflict("A room with this name already exists")

        await room_crud.add_member(self.db, room.id, creator_id)
        logger.info(f"[ROOMS] Room {room.id} '{name}' created by {creator_id}")
        return room

    async def list_rooms(self) -> List[Room]:
        return await room_crud.list_rooms(self.db)

    async def join_room(self, room_id: int, user_id: UUID) -> Room:
        room = await self._get_room(room_id)
        if await room_crud.get_membership(self.db, room_id, user_id) is None:
            try:
                await room_crud.add_member(self.db, room_id, user_id)
            except IntegrityError:
                # Joined concurrently; membership exists either way
                await self.db.rollback()
                room = await self._get_room(room_id)
            else:
                logger.info(f"[ROOMS] {user_id} joined room {room_id}")
        return room

    async def leave_room(self, room_id: int, user_id: UUID) -> None:
        await self._get_room(room_id)
        if await room_crud.remove_member(self.db, room_id, user_id):
            logger.info(f"[ROOMS] {user_id} left room {room_id}")

    async def list_members(self, room_id: int) -> List[User]:
        await self._get_room(room_id)
        return await room_crud.list_members(self.db, room_id)

    async def list_member_ids(self, room_id: int) -> List[UUID]:
        return await room_crud.list_member_ids(self.db, room_id)

    async def post_message(self, room_id: int, sender_id: UUID, content: str) -> RoomMessage:
        """
        Raises:
            NotFound: unknown room.
            Forbidden: the sender is not a member.
        """
        await self._require_member(room_id, sender_id)
        message = await room_crud.create_room_message(self.db, room_id, sender_id, content)
        logger.info(f"[ROOMS] Message {message.id} posted to room {room_id} by {sender_id}")
        return message

    async def list_messages(self, room_id: int, user_id: UUID) -> List[RoomMessage]:
        await self._require_member(room_id, user_id)
        return await room_crud.list_room_messages(self.db, room_id)

    async def _get_room(self, room_id: int) -> Room:
        room = await room_crud.get_room(self.db, room_id)
        if room is None:
            raise NotFound("Room not found")
        return room

    async def _require_member(self, room_id: int, user_id: UUID) -> None:
        await self._get_room(room_id)
        if await room_crud.get_membership(self.db, room_id, user_id) is None:
            raise Forbidden("You are not a member of this room")
