from fastapi import WebSocket
from typing import Dict, Iterable, Set
import logging

logger = logging.getLogger(__name__)


class ConnectionManager:
    """
    Manager for WebSocket connections.
    Handles connection tracking, per-user delivery, and disconnection.

    A user may hold several sockets at once (tabs, devices); every one of
    them receives the events addressed to that user.
    """

    def __init__(self):
        # Maps user_id to the set of its open sockets
        self.active_connections: Dict[str, Set[WebSocket]] = {}

    async def connect(self, websocket: WebSocket, user_id: str):
        """
        Register an accepted WebSocket for a user.

        Args:
            websocket: The WebSocket connection
            user_id: Authenticated user id (required)
        """
        if not user_id:
            logger.error("[WS] Cannot connect without user_id")
            raise ValueError("user_id is required")

        self.active_connections.setdefault(user_id, set()).add(websocket)
        logger.info(f"[WS] Connected user {user_id} ({len(self.active_connections[user_id])} sockets)")

    async def disconnect(self, websocket: WebSocket, user_id: str):
        """
        Remove a WebSocket connection for a user.

        Args:
            websocket: The WebSocket connection
            user_id: User id the socket was registered under
        """
        sockets = self.active_connections.get(user_id)
        if not sockets:
            return

        sockets.discard(websocket)
        if not sockets:
            del self.active_connections[user_id]
        logger.info(f"[WS] Disconnected a socket of user {user_id}")

    async def send_personal_message(self, message: dict, websocket: WebSocket):
        """
        Send a message to a specific WebSocket

        Args:
            message: The message to send
            websocket: The destination WebSocket connection
        """
        try:
            await websocket.send_json(message)
        except Exception as e:
            logger.error(f"[WS] Error sending personal message: {e}")

    async def send_to_user(self, message: dict, user_id: str):
        """
        Send a message to every socket of a user. Sockets that fail are
        dropped.

        Args:
            message: The message to send
            user_id: Target user id
        """
        sockets = list(self.active_connections.get(user_id, ()))
        if not sockets:
            logger.debug(f"[WS] User {user_id} not connected, skipping delivery")
            return

        for websocket in sockets:
            try:
                await websocket.send_json(message)
            except Exception as e:
                logger.error(f"[WS] Error sending to user {user_id}: {e}")
                await self.disconnect(websocket, user_id)

    async def send_to_users(self, message: dict, user_ids: Iterable[str]):
        for user_id in set(user_ids):
            await self.send_to_user(message, user_id)

    def get_total_connections(self) -> int:
        """
        Get the total number of open sockets across all users.

        Returns:
            int: Total number of connections
        """
        return sum(len(sockets) for sockets in self.active_connections.values())

    def is_user_connected(self, user_id: str) -> bool:
        return bool(self.active_connections.get(user_id))
