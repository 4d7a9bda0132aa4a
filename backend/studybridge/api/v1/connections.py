"""
API endpoints for connection requests and friends.
"""
import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query

from studybridge.api.dependencies import get_relationship_service, get_ws_handler
from studybridge.auth import CurrentIdentity
from studybridge.db.models.connection import ConnectionStatus
from studybridge.schemas.connection import ConnectionActionResponse, ConnectionRequestRead
from studybridge.schemas.user import UserRead
from studybridge.services import RelationshipService
from studybridge.ws.events import WebSocketEventHandler

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Connections"])


@router.post("/connect/{user_id}", response_model=ConnectionActionResponse, summary="Send Connection Request")
async def send_connection_request(
    user_id: UUID,
    identity: CurrentIdentity,
    background_tasks: BackgroundTasks,
    relationships: RelationshipService = Depends(get_relationship_service),
    ws_handler: WebSocketEventHandler = Depends(get_ws_handler),
):
    """
    Send a connection request to another user.

    Raises:
        400 (invalid_request): the target is the caller.
        400 (conflict): an active request already exists between the pair.
        404 (not_found): the target user does not exist.
    """
    request = await relationships.send_request(identity.user_id, user_id)
    payload = ConnectionRequestRead.model_validate(request)
    background_tasks.add_task(ws_handler.notify_connection_request, payload.model_dump(mode="json"))
    return ConnectionActionResponse(message="Connection request sent", request=payload)


@router.get("/connections", response_model=List[ConnectionRequestRead], summary="List Connection Requests")
async def list_connections(
    identity: CurrentIdentity,
    status: Optional[ConnectionStatus] = Query(None, description="Filter by request status"),
    relationships: RelationshipService = Depends(get_relationship_service),
):
    """
    List every request the caller sent or received, newest first.
    """
    return await relationships.list_connections(identity.user_id, status)


@router.put("/connect/accept/{request_id}", response_model=ConnectionActionResponse, summary="Accept Connection Request")
async def accept_connection_request(
    request_id: int,
    identity: CurrentIdentity,
    background_tasks: BackgroundTasks,
    relationships: RelationshipService = Depends(get_relationship_service),
    ws_handler: WebSocketEventHandler = Depends(get_ws_handler),
):
    """
    Accept a pending request addressed to the caller. Accepting twice is
    harmless.

    Raises:
        403 (forbidden): the request does not exist or is not addressed to
            the caller.
    """
    request = await relationships.accept_request(request_id, identity.user_id)
    payload = ConnectionRequestRead.model_validate(request)
    background_tasks.add_task(ws_handler.notify_connection_accepted, payload.model_dump(mode="json"))
    return ConnectionActionResponse(message="Connection request accepted", request=payload)


@router.delete("/connect/reject/{request_id}", response_model=ConnectionActionResponse, summary="Reject Connection Request")
async def reject_connection_request(
    request_id: int,
    identity: CurrentIdentity,
    relationships: RelationshipService = Depends(get_relationship_service),
):
    """
    Reject (delete) a pending request addressed to the caller. The sender
    may send a new request afterwards.

    Raises:
        403 (forbidden): the request does not exist or is not addressed to
            the caller.
        400 (conflict): the request was already accepted.
    """
    await relationships.reject_request(request_id, identity.user_id)
    return ConnectionActionResponse(message="Connection request rejected")


@router.get("/friends", response_model=List[UserRead], summary="List Friends")
async def list_friends(
    identity: CurrentIdentity,
    relationships: RelationshipService = Depends(get_relationship_service),
):
    return await relationships.list_friends(identity.user_id)
