"""
Profile and user directory endpoints.
"""
import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from studybridge.api.dependencies import get_account_service
from studybridge.auth import CurrentIdentity
from studybridge.schemas.user import ProfileUpdate, UserPublic, UserRead, UserSearchParams
from studybridge.services import AccountService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


@router.get("/profile", response_model=UserRead)
async def read_profile(
    identity: CurrentIdentity,
    accounts: AccountService = Depends(get_account_service),
):
    """Retrieve the profile of the authenticated user."""
    return await accounts.get_user(identity.user_id)


@router.put("/profile", response_model=UserRead)
async def update_profile(
    update: ProfileUpdate,
    identity: CurrentIdentity,
    accounts: AccountService = Depends(get_account_service),
):
    """
    Update the authenticated user's profile. Only fields present in the
    body are changed.
    """
    user = await accounts.update_profile(identity.user_id, update)
    logger.info(f"[PROFILE] Updated fields {sorted(update.model_dump(exclude_unset=True))} for {identity.user_id}")
    return user


@router.get("/users", response_model=List[UserPublic])
async def search_users(
    city: Optional[str] = Query(None),
    country: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    college: Optional[str] = Query(None),
    accounts: AccountService = Depends(get_account_service),
):
    """
    List users, optionally filtered by location and college. Contact
    details are left out of the directory view.
    """
    params = UserSearchParams(city=city, country=country, state=state, college=college)
    return await accounts.search_users(params)


@router.get("/users/{user_id}", response_model=UserPublic)
async def read_user(
    user_id: UUID,
    accounts: AccountService = Depends(get_account_service),
):
    return await accounts.get_user(user_id)
