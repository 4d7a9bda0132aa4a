"""
Connection request lifecycle.

A request starts ``pending`` and ends either ``accepted`` (terminal) or
deleted when the receiver rejects it. At most one active request exists per
unordered pair of users; the read check gives a friendly error and the
unique pair constraint catches concurrent duplicates that slip past it.
"""
import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from studybridge.core.errors import Conflict, Forbidden, InvalidRequest, NotFound
from studybridge.crud import connection as connection_crud
from studybridge.crud import user as user_crud
from studybridge.db.models.connection import ConnectionRequest, ConnectionStatus
from studybridge.db.models.user import User

logger = logging.getLogger(__name__)


class RelationshipService:
    """
    Mediates connection requests between two users.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def send_request(self, sender_id: UUID, receiver_id: UUID) -> ConnectionRequest:
        """
        Create a pending request from ``sender_id`` to ``receiver_id``.

        Raises:
            InvalidRequest: if the two ids are the same user.
            NotFound: if the receiver does not exist.
            Conflict: if an active request already exists for the pair.
        """
        if sender_id == receiver_id:
            raise InvalidRequest("You cannot send a connection request to yourself")

        receiver = await user_crud.get_user(self.db, receiver_id)
        if receiver is None:
            raise NotFound("User not found")

        existing = await connection_crud.get_active_between(self.db, sender_id, receiver_id)
        if existing is not None:
            logger.info(f"[CONNECTIONS] Duplicate request {sender_id} -> {receiver_id} (existing id={existing.id}, status={existing.status})")
            raise Conflict("A connection request already exists between these users")

        try:
            request = await connection_crud.create_request(self.db, sender_id, receiver_id)
        except IntegrityError:
            # A concurrent request for the same pair won the insert
            await self.db.rollback()
            logger.warning(f"[CONNECTIONS] Concurrent duplicate request {sender_id} -> {receiver_id}")
            raise Conflict("A connection request already exists between these users")

        logger.info(f"[CONNECTIONS] Request {request.id} sent {sender_id} -> {receiver_id}")
        return request

    async def accept_request(self, request_id: int, acting_user_id: UUID) -> ConnectionRequest:
        """
        Accept a pending request addressed to the acting user.

        Accepting a request that is already accepted returns it unchanged.

        Raises:
            Forbidden: if the request does not exist or the acting user is
                not its receiver.
        """
        updated = await connection_crud.accept_pending(self.db, request_id, acting_user_id)
        request = await self._get_owned_request(request_id, acting_user_id)
        if updated:
            logger.info(f"[CONNECTIONS] Request {request_id} accepted by {acting_user_id}")
        else:
            logger.info(f"[CONNECTIONS] Request {request_id} was already accepted")
        return request

    async def reject_request(self, request_id: int, acting_user_id: UUID) -> None:
        """
        Reject (delete) a pending request addressed to the acting user.

        Raises:
            Forbidden: if the request does not exist or the acting user is
                not its receiver.
            Conflict: if the request has already been accepted.
        """
        deleted = await connection_crud.delete_pending(self.db, request_id, acting_user_id)
        if deleted:
            logger.info(f"[CONNECTIONS] Request {request_id} rejected by {acting_user_id}")
            return

        request = await self._get_owned_request(request_id, acting_user_id)
        raise Conflict(f"Connection request is already {request.status}")

    async def list_connections(
        self,
        user_id: UUID,
        status: Optional[ConnectionStatus] = None,
    ) -> List[ConnectionRequest]:
        return await connection_crud.list_for_user(self.db, user_id, status)

    async def list_friends(self, user_id: UUID) -> List[User]:
        return await connection_crud.list_friends(self.db, user_id)

    async def _get_owned_request(self, request_id: int, acting_user_id: UUID) -> ConnectionRequest:
        # Missing and not-yours both map to 403 so ids cannot be probed
        request = await connection_crud.get_request(self.db, request_id)
        if request is None or request.receiver_id != acting_user_id:
            logger.warning(f"[CONNECTIONS] User {acting_user_id} may not act on request {request_id}")
            raise Forbidden("Only the receiver can respond to this connection request")
        return request
