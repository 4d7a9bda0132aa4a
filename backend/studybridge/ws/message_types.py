"""
WebSocket message type definitions.
"""
from enum import Enum
from typing import Dict, Any, Optional


class MessageType(str, Enum):
    """Enum of WebSocket message types."""
    # System messages
    CONNECTED = "connected"
    ERROR = "error"
    PING = "ping"
    PONG = "pong"

    # Messaging events
    NEW_MESSAGE = "new_message"
    ROOM_MESSAGE = "room_message"

    # Relationship events
    CONNECTION_REQUEST = "connection_request"
    CONNECTION_ACCEPTED = "connection_accepted"


class MessageSchema:
    """Message schema definitions for different message types."""

    @staticmethod
    def connected_message(user_id: str) -> Dict[str, Any]:
        return {
            "type": MessageType.CONNECTED.value,
            "user_id": user_id
        }

    @staticmethod
    def error_message(message: str, code: Optional[str] = None) -> Dict[str, Any]:
        """
        Create an error message.

        Args:
            message: Error message text
            code: Optional machine-readable error code

        Returns:
            Dict: Formatted error message
        """
        result = {
            "type": MessageType.ERROR.value,
            "message": message
        }

        if code is not None:
            result["code"] = code

        return result

    @staticmethod
    def pong_message() -> Dict[str, str]:
        return {"type": MessageType.PONG.value}

    @staticmethod
    def event_message(message_type: MessageType, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Wrap a JSON-serialisable payload as an event of the given type.
        """
        return {
            "type": message_type.value,
            "data": data
        }
