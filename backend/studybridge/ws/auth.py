from typing import Optional

from studybridge.core.security import decode_access_token


async def validate_ws_token(token: Optional[str]) -> Optional[str]:
    """
    Validate a token from a WebSocket connection.

    Args:
        token: The bearer token passed as the ``token`` query parameter

    Returns:
        Optional[str]: The user_id if valid, None otherwise
    """
    if not token:
        return None

    user_id = decode_access_token(token)
    return str(user_id) if user_id is not None else None
