from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

# Import passlib for hashing
from passlib.context import CryptContext

from .config import settings

# --- Hashing Setup ---
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)
# --- End Hashing Setup ---


def create_access_token(user_id: UUID, expires_delta: Optional[timedelta] = None) -> tuple[str, datetime]:
    """
    Issue a signed JWT carrying only the user id.

    Returns:
        The encoded token and its expiry time (UTC).
    """
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.JWT_EXPIRATION_MINUTES))
    to_encode = {"sub": str(user_id), "exp": expire}
    encoded_jwt = jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return encoded_jwt, expire


def decode_access_token(token: str) -> Optional[UUID]:
    """
    Verify a token's signature and expiry.

    Returns:
        The user id from ``sub``, or None if the token is invalid, expired
        or malformed.
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None
    subject = payload.get("sub")
    if subject is None:
        return None
    try:
        return UUID(subject)
    except (TypeError, ValueError):
        return None
