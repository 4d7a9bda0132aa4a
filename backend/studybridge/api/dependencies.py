"""
Shared dependencies for API endpoints.
"""
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from studybridge.db.dependencies import get_db
from studybridge.services import AccountService, MessagingService, RelationshipService, RoomService
from studybridge.ws.events import WebSocketEventHandler


def get_ws_handler(request: Request) -> WebSocketEventHandler:
    """
    Return the application's WebSocketEventHandler (set up in main.py).
    """
    return request.app.state.ws_event_handler


def get_account_service(db: AsyncSession = Depends(get_db)) -> AccountService:
    return AccountService(db)


def get_relationship_service(db: AsyncSession = Depends(get_db)) -> RelationshipService:
    return RelationshipService(db)


def get_messaging_service(db: AsyncSession = Depends(get_db)) -> MessagingService:
    return MessagingService(db)


def get_room_service(db: AsyncSession = Depends(get_db)) -> RoomService:
    return RoomService(db)
