"""
API endpoints for chat rooms.
"""
import logging
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, status
from pydantic import BaseModel

from studybridge.api.dependencies import get_room_service, get_ws_handler
from studybridge.auth import CurrentIdentity
from studybridge.schemas.room import RoomCreate, RoomMessageCreate, RoomMessageRead, RoomRead
from studybridge.schemas.user import UserRead
from studybridge.services import RoomService
from studybridge.ws.events import WebSocketEventHandler

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/rooms",
    tags=["Rooms"],
)


class RoomActionResponse(BaseModel):
    message: str


@router.post("", response_model=RoomRead, status_code=status.HTTP_201_CREATED, summary="Create Room")
async def create_room(
    body: RoomCreate,
    identity: CurrentIdentity,
    rooms: RoomService = Depends(get_room_service),
):
    """
    Create a room. The creator is added as its first member.

    Raises:
        400 (conflict): the room name is taken.
    """
    return await rooms.create_room(identity.user_id, body.name, body.description)


@router.get("", response_model=List[RoomRead], summary="List Rooms")
async def list_rooms(
    identity: CurrentIdentity,
    rooms: RoomService = Depends(get_room_service),
):
    return await rooms.list_rooms()


@router.post("/{room_id}/join", response_model=RoomRead, summary="Join Room")
async def join_room(
    room_id: int,
    identity: CurrentIdentity,
    rooms: RoomService = Depends(get_room_service),
):
    return await rooms.join_room(room_id, identity.user_id)


@router.delete("/{room_id}/leave", response_model=RoomActionResponse, summary="Leave Room")
async def leave_room(
    room_id: int,
    identity: CurrentIdentity,
    rooms: RoomService = Depends(get_room_service),
):
    await rooms.leave_room(room_id, identity.user_id)
    return RoomActionResponse(message="Left room")


@router.get("/{room_id}/members", response_model=List[UserRead], summary="List Room Members")
async def list_room_members(
    room_id: int,
    identity: CurrentIdentity,
    rooms: RoomService = Depends(get_room_service),
):
    return await rooms.list_members(room_id)


@router.post(
    "/{room_id}/messages",
    response_model=RoomMessageRead,
    status_code=status.HTTP_201_CREATED,
    summary="Post Room Message",
)
async def post_room_message(
    room_id: int,
    body: RoomMessageCreate,
    identity: CurrentIdentity,
    background_tasks: BackgroundTasks,
    rooms: RoomService = Depends(get_room_service),
    ws_handler: WebSocketEventHandler = Depends(get_ws_handler),
):
    """
    Post to a room the caller belongs to. Connected members receive a
    ``room_message`` event.

    Raises:
        403 (forbidden): the caller is not a member.
        404 (not_found): unknown room.
    """
    message = await rooms.post_message(room_id, identity.user_id, body.content)
    member_ids = await rooms.list_member_ids(room_id)
    payload = RoomMessageRead.model_validate(message)
    background_tasks.add_task(ws_handler.notify_room_message, payload.model_dump(mode="json"), member_ids)
    return payload


@router.get("/{room_id}/messages", response_model=List[RoomMessageRead], summary="List Room Messages")
async def list_room_messages(
    room_id: int,
    identity: CurrentIdentity,
    rooms: RoomService = Depends(get_room_service),
):
    return await rooms.list_messages(room_id, identity.user_id)
