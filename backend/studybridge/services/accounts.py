"""
Registration, login and profile management.
"""
import logging
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from studybridge.core.errors import Conflict, InvalidCredentials, NotFound
from studybridge.core.security import create_access_token, get_password_hash, verify_password
from studybridge.crud import user as user_crud
from studybridge.db.models.user import User
from studybridge.schemas.user import ProfileUpdate, UserSearchParams

logger = logging.getLogger(__name__)


class AccountService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def register(
        self,
        name: str,
        email: str,
        password: str,
        phone: Optional[str] = None,
    ) -> Tuple[User, str, datetime]:
        """
        Create a user and issue an access token.

        Returns:
            The new user, the token and its expiry.

        Raises:
            Conflict: if the email (or phone) is already registered.
        """
        email = email.lower().strip()
        if await user_crud.get_by_email_or_phone(self.db, email, phone) is not None:
            logger.info(f"[AUTH] Registration rejected, user exists: {email}")
            raise Conflict("User already exists")

        try:
            user = await user_crud.create_user(
                self.db,
                name=name,
                email=email,
                phone=phone,
                password_hash=get_password_hash(password),
            )
        except IntegrityError:
            await self.db.rollback()
            raise Conflict("User already exists")

        token, expires_at = create_access_token(user.id)
        logger.info(f"[AUTH] Registered user {user.id} ({email})")
        return user, token, expires_at

    async def login(self, email: str, password: str) -> Tuple[User, str, datetime]:
        """
        Raises:
            InvalidCredentials: unknown email or wrong password. The two cases
                are not distinguished.
        """
        user = await user_crud.get_by_email(self.db, email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning(f"[AUTH] Failed login for {email.lower().strip()}")
            raise InvalidCredentials()

        token, expires_at = create_access_token(user.id)
        logger.info(f"[AUTH] User {user.id} logged in")
        return user, token, expires_at

    async def get_user(self, user_id: UUID) -> User:
        user = await user_crud.get_user(self.db, user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    async def update_profile(self, user_id: UUID, update: ProfileUpdate) -> User:
        """
        Apply the fields present in ``update``; concurrent updates are
        last-write-wins.

        Raises:
            NotFound: the user no longer exists.
            Conflict: the new phone number belongs to someone else.
        """
        user = await self.get_user(user_id)
        fields = update.model_dump(exclude_unset=True)
        try:
            return await user_crud.update_user(self.db, user, fields)
        except IntegrityError:
            await self.db.rollback()
            if fields.get("phone") is None:
                raise
            # phone is the only unique column a profile update can touch
            logger.info(f"[PROFILE] Phone conflict for {user_id}")
            raise Conflict("Phone number already in use")

    async def search_users(self, params: UserSearchParams) -> List[User]:
        return await user_crud.search_users(
            self.db,
            city=params.city,
            country=params.country,
            state=params.state,
            college=params.college,
        )
