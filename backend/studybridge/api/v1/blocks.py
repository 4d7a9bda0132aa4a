"""
API endpoints for blocking users.
"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from studybridge.api.dependencies import get_messaging_service
from studybridge.auth import CurrentIdentity
from studybridge.schemas.user import UserRead
from studybridge.services import MessagingService

router = APIRouter(tags=["Blocks"])


class BlockResponse(BaseModel):
    message: str


@router.post("/block/{user_id}", response_model=BlockResponse, summary="Block User")
async def block_user(
    user_id: UUID,
    identity: CurrentIdentity,
    messaging: MessagingService = Depends(get_messaging_service),
):
    """
    Block a user. Blocking someone twice is a no-op.

    Raises:
        400 (invalid_request): the caller tried to block themself.
        404 (not_found): the target user does not exist.
    """
    await messaging.block(identity.user_id, user_id)
    return BlockResponse(message="User blocked")


@router.delete("/block/{user_id}", response_model=BlockResponse, summary="Unblock User")
async def unblock_user(
    user_id: UUID,
    identity: CurrentIdentity,
    messaging: MessagingService = Depends(get_messaging_service),
):
    removed = await messaging.unblock(identity.user_id, user_id)
    return BlockResponse(message="User unblocked" if removed else "User was not blocked")


@router.get("/blocks", response_model=List[UserRead], summary="List Blocked Users")
async def list_blocked_users(
    identity: CurrentIdentity,
    messaging: MessagingService = Depends(get_messaging_service),
):
    return await messaging.list_blocked(identity.user_id)
