"""
WebSocket event fan-out for domain events.
"""
import logging
from typing import Any, Dict, Iterable
from uuid import UUID

from studybridge.ws.connection_manager import ConnectionManager
from studybridge.ws.message_types import MessageSchema, MessageType

logger = logging.getLogger(__name__)


class WebSocketEventHandler:
    """
    Turns domain events into WebSocket messages and routes them to the
    sockets of the users involved.
    """

    def __init__(self, connection_manager: ConnectionManager):
        """
        Initialize the event handler with a connection manager.

        Args:
            connection_manager: The WebSocket connection manager
        """
        self.connection_manager = connection_manager

    async def notify_new_message(self, message: Dict[str, Any]):
        """
        Deliver a stored direct message to both participants.

        Args:
            message: Serialised message (``MessageRead`` in JSON mode)
        """
        event = MessageSchema.event_message(MessageType.NEW_MESSAGE, message)
        await self.connection_manager.send_to_users(
            event, [str(message["sender_id"]), str(message["receiver_id"])]
        )

    async def notify_room_message(self, message: Dict[str, Any], member_ids: Iterable[UUID]):
        event = MessageSchema.event_message(MessageType.ROOM_MESSAGE, message)
        await self.connection_manager.send_to_users(event, [str(member_id) for member_id in member_ids])

    async def notify_connection_request(self, request: Dict[str, Any]):
        event = MessageSchema.event_message(MessageType.CONNECTION_REQUEST, request)
        await self.connection_manager.send_to_user(event, str(request["receiver_id"]))

    async def notify_connection_accepted(self, request: Dict[str, Any]):
        event = MessageSchema.event_message(MessageType.CONNECTION_ACCEPTED, request)
        await self.connection_manager.send_to_user(event, str(request["sender_id"]))
