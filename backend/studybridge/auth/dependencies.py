"""
Authentication dependencies for FastAPI.
"""
import logging
from dataclasses import dataclass
from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from studybridge.core.errors import Unauthenticated
from studybridge.core.security import decode_access_token

# Configure logging
logger = logging.getLogger(__name__)

# Bearer scheme; missing headers are reported by get_current_identity
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    """Verified caller identity extracted from a bearer token."""
    user_id: UUID


async def get_current_identity(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> Identity:
    """
    Validate the bearer token and return the caller's identity.

    The token is stateless: only its signature and expiry are checked, no
    database lookup is made.

    Raises:
        Unauthenticated: missing header, malformed or expired token.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()

    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        logger.info("[AUTH] Rejected invalid or expired bearer token")
        raise Unauthenticated("Invalid or expired token")

    return Identity(user_id=user_id)


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
