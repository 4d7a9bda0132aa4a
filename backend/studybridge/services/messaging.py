"""
Blocking and direct messaging.
"""
import logging
from typing import List
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from studybridge.core.errors import Forbidden, InvalidRequest, NotFound
from studybridge.crud import block as block_crud
from studybridge.crud import message as message_crud
from studybridge.crud import user as user_crud
from studybridge.db.models.message import Message
from studybridge.db.models.user import User

logger = logging.getLogger(__name__)


class MessagingService:
    """
    Persists direct messages, gated on the absence of a block in either
    direction between the two users.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def is_blocked(self, a: UUID, b: UUID) -> bool:
        return await block_crud.exists_either_direction(self.db, a, b)

    async def block(self, blocker_id: UUID, blocked_id: UUID) -> None:
        """
        Block ``blocked_id`` on behalf of ``blocker_id``. Blocking an already
        blocked user is a no-op.

        Raises:
            InvalidRequest: on a self-block.
            NotFound: if the target user does not exist.
        """
        if blocker_id == blocked_id:
            raise InvalidRequest("You cannot block yourself")

        if await user_crud.get_user(self.db, blocked_id) is None:
            raise NotFound("User not found")

        if await block_crud.get_block(self.db, blocker_id, blocked_id) is not None:
            logger.info(f"[BLOCKS] {blocker_id} already blocks {blocked_id}")
            return

        try:
            await block_crud.create_block(self.db, blocker_id, blocked_id)
        except IntegrityError:
            # Lost a race against an identical block; the row exists either way
            await self.db.rollback()
            logger.info(f"[BLOCKS] Concurrent duplicate block {blocker_id} -> {blocked_id}")
            return

        logger.info(f"[BLOCKS] {blocker_id} blocked {blocked_id}")

    async def unblock(self, blocker_id: UUID, blocked_id: UUID) -> bool:
        removed = await block_crud.delete_block(self.db, blocker_id, blocked_id)
        if removed:
            logger.info(f"[BLOCKS] {blocker_id} unblocked {blocked_id}")
        return removed

    async def list_blocked(self, blocker_id: UUID) -> List[User]:
        return await block_crud.list_blocked_users(self.db, blocker_id)

    async def send_message(self, sender_id: UUID, receiver_id: UUID, content: str) -> Message:
        """
        Store a message from ``sender_id`` to ``receiver_id``.

        Raises:
            Forbidden: if either user has blocked the other.
            NotFound: if the receiver does not exist.
        """
        if await self.is_blocked(sender_id, receiver_id):
            logger.info(f"[MESSAGES] Blocked message {sender_id} -> {receiver_id}")
            raise Forbidden("Messaging between these users is blocked")

        if await user_crud.get_user(self.db, receiver_id) is None:
            raise NotFound("User not found")

        message = await message_crud.create_message(self.db, sender_id, receiver_id, content)
        logger.info(f"[MESSAGES] Message {message.id} stored {sender_id} -> {receiver_id}")
        return message

    async def list_conversation(self, a: UUID, b: UUID) -> List[Message]:
        return await message_crud.list_conversation(self.db, a, b)

    async def list_conversation_peers(self, user_id: UUID) -> List[User]:
        peer_ids = await message_crud.list_peer_ids(self.db, user_id)
        return await user_crud.get_users_by_ids(self.db, peer_ids)
