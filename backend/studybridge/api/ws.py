"""
WebSocket endpoint for real-time delivery of messages and connection events.
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status

from studybridge.api.dependencies import get_ws_handler
from studybridge.auth import CurrentIdentity
from studybridge.ws.auth import validate_ws_token
from studybridge.ws.events import WebSocketEventHandler
from studybridge.ws.message_types import MessageSchema, MessageType

logger = logging.getLogger(__name__)

router = APIRouter(tags=["websocket"])


@router.get("/ws/status", response_model=Dict[str, Any])
async def get_ws_status(
    identity: CurrentIdentity,
    ws_handler: WebSocketEventHandler = Depends(get_ws_handler),
):
    """
    Connection status of the caller and the total socket count.
    """
    manager = ws_handler.connection_manager
    return {
        "connected": manager.is_user_connected(str(identity.user_id)),
        "connections": manager.get_total_connections(),
    }


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """
    WebSocket endpoint for real-time communication.

    Connection URL: ws://server/ws?token={access_token}

    The server pushes ``new_message``, ``room_message``,
    ``connection_request`` and ``connection_accepted`` events. Clients may
    send ``{"type": "ping"}`` to keep the connection alive.
    """
    ws_handler: WebSocketEventHandler = websocket.app.state.ws_event_handler
    manager = ws_handler.connection_manager

    user_id = await validate_ws_token(websocket.query_params.get("token"))
    if not user_id:
        logger.info("[WS] Connection rejected: missing or invalid token")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason="Invalid or missing token")
        return

    await websocket.accept()
    await manager.connect(websocket, user_id)
    await manager.send_personal_message(MessageSchema.connected_message(user_id), websocket)

    try:
        while True:
            data = await websocket.receive_json()
            message_type_str = data.get("type") if isinstance(data, dict) else None

            if not message_type_str:
                await manager.send_personal_message(MessageSchema.error_message("Message type missing"), websocket)
                continue

            try:
                message_type = MessageType(message_type_str)
            except ValueError:
                await manager.send_personal_message(
                    MessageSchema.error_message(f"Unknown message type: {message_type_str}"), websocket
                )
                continue

            if message_type == MessageType.PING:
                await manager.send_personal_message(MessageSchema.pong_message(), websocket)
            else:
                logger.debug(f"[WS] Ignoring client message of type {message_type.value} from {user_id}")

    except WebSocketDisconnect as e:
        logger.info(f"[WS] User {user_id} disconnected (code={e.code})")
    except ValueError as e:
        # receive_json raises on frames that are not valid JSON
        logger.warning(f"[WS] Invalid frame from {user_id}: {e}")
        try:
            await websocket.close(code=status.WS_1003_UNSUPPORTED_DATA)
        except RuntimeError:
            pass
    finally:
        await manager.disconnect(websocket, user_id)
