"""
API endpoints for direct messages.
"""
import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends

from studybridge.api.dependencies import get_messaging_service, get_ws_handler
from studybridge.auth import CurrentIdentity
from studybridge.schemas.message import MessageCreate, MessageRead
from studybridge.schemas.user import UserRead
from studybridge.services import MessagingService
from studybridge.ws.events import WebSocketEventHandler

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Messages"])


@router.post("/message/{user_id}", response_model=MessageRead, summary="Send Direct Message")
async def send_message(
    user_id: UUID,
    body: MessageCreate,
    identity: CurrentIdentity,
    background_tasks: BackgroundTasks,
    messaging: MessagingService = Depends(get_messaging_service),
    ws_handler: WebSocketEventHandler = Depends(get_ws_handler),
):
    """
    Send a message to another user. Connected sockets of both participants
    receive a ``new_message`` event.

    Raises:
        403 (forbidden): either user has blocked the other.
        404 (not_found): the receiver does not exist.
    """
    message = await messaging.send_message(identity.user_id, user_id, body.content)
    payload = MessageRead.model_validate(message)
    background_tasks.add_task(ws_handler.notify_new_message, payload.model_dump(mode="json"))
    return payload


@router.get("/chat/{user_id}", response_model=List[MessageRead], summary="Get Conversation")
async def get_conversation(
    user_id: UUID,
    identity: CurrentIdentity,
    messaging: MessagingService = Depends(get_messaging_service),
):
    """Messages between the caller and ``user_id``, oldest first."""
    return await messaging.list_conversation(identity.user_id, user_id)


@router.get("/chats", response_model=List[UserRead], summary="List Conversation Peers")
async def list_conversation_peers(
    identity: CurrentIdentity,
    messaging: MessagingService = Depends(get_messaging_service),
):
    """Users the caller has exchanged at least one message with."""
    return await messaging.list_conversation_peers(identity.user_id)
