"""
CRUD operations for users.
"""
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from studybridge.db.models.user import User


async def get_user(db: AsyncSession, user_id: UUID) -> Optional[User]:
    """
    Get a user by ID.

    Args:
        db: Database session
        user_id: User ID

    Returns:
        Optional[User]: User if found, None otherwise
    """
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email.lower().strip()))
    return result.scalar_one_or_none()


async def get_by_email_or_phone(db: AsyncSession, email: str, phone: Optional[str]) -> Optional[User]:
    """
    Find a user holding either the given email or, if supplied, the phone.
    """
    conditions = [User.email == email.lower().strip()]
    if phone:
        conditions.append(User.phone == phone)
    result = await db.execute(select(User).where(or_(*conditions)).limit(1))
    return result.scalar_one_or_none()


async def get_users_by_ids(db: AsyncSession, user_ids: Iterable[UUID]) -> List[User]:
    ids = list(user_ids)
    if not ids:
        return []
    result = await db.execute(select(User).where(User.id.in_(ids)).order_by(User.name))
    return list(result.scalars().all())


async def create_user(
    db: AsyncSession,
    *,
    name: str,
    email: str,
    password_hash: str,
    phone: Optional[str] = None,
) -> User:
    """
    Insert a new user and flush so the generated id is available.
    """
    db_user = User(
        name=name,
        email=email.lower().strip(),
        phone=phone,
        password_hash=password_hash,
    )
    db.add(db_user)
    await db.flush()
    await db.refresh(db_user)
    return db_user


async def update_user(
    db: AsyncSession,
    db_obj: User,
    obj_in: BaseModel | Dict[str, Any]
) -> User:
    """
    Update an existing user's profile fields.

    Args:
        db: Database session.
        db_obj: The user object to update.
        obj_in: Pydantic schema or dict containing update data.

    Returns:
        The updated user object.
    """
    if isinstance(obj_in, dict):
        update_data = obj_in
    elif isinstance(obj_in, BaseModel):
        # Use model_dump with exclude_unset=True to only update provided fields
        update_data = obj_in.model_dump(exclude_unset=True)
    else:
        raise ValueError("obj_in must be a pydantic model or a dict")

    for field, value in update_data.items():
        setattr(db_obj, field, value)

    db.add(db_obj)
    await db.flush()
    await db.refresh(db_obj)
    # Commit is handled by the get_db dependency
    return db_obj


async def search_users(
    db: AsyncSession,
    *,
    city: Optional[str] = None,
    country: Optional[str] = None,
    state: Optional[str] = None,
    college: Optional[str] = None,
) -> List[User]:
    """
    List users whose profile matches every supplied filter.

    Matching is exact but case-insensitive; filters left as None are
    ignored. With no filters every user is returned.
    """
    stmt = select(User)
    for column, value in (
        (User.city, city),
        (User.country, country),
        (User.state, state),
        (User.college, college),
    ):
        if value:
            stmt = stmt.where(func.lower(column) == value.strip().lower())
    result = await db.execute(stmt.order_by(User.name))
    return list(result.scalars().all())
