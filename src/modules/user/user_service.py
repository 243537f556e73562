# src/modules/user/user_service.py

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from src.common.database.database import query_errors
from src.common.exceptions import ProfileError
from src.common.utils.global_messages import GlobalMessages
from src.models.models import User, UserRole, ClientProfile
from .schemas import ClientProfileResponse, ProfileResponse

logger = logging.getLogger(__name__)


async def _get_client_profile(user: User, db: AsyncSession) -> Optional[ClientProfile]:
    async with query_errors(db, "load client profile"):
        result = await db.execute(select(ClientProfile).where(ClientProfile.user_id == user.id))
        return result.scalars().first()


async def get_user_profile(current_user: User, db: AsyncSession) -> ProfileResponse:
    """
    Retrieve the current user's profile.

    Clients also get their client profile details.
    """
    client_profile = None
    if current_user.role == UserRole.CLIENT:
        profile = await _get_client_profile(current_user, db)
        if profile is not None:
            client_profile = ClientProfileResponse.model_validate(profile)

    return ProfileResponse(
        id=current_user.id,
        email=current_user.email,
        role=current_user.role,
        first_name=current_user.first_name,
        last_name=current_user.last_name,
        phone=current_user.phone,
        avatar_url=current_user.avatar_url,
        created_at=current_user.created_at,
        updated_at=current_user.updated_at,
        client_profile=client_profile,
    )


async def update_user_profile(current_user: User, profile_data: dict, db: AsyncSession) -> ProfileResponse:
    """
    Update the current user's profile with provided data.

    Only the fields provided (non-None) will be updated.
    """
    async with query_errors(db, "update profile"):
        for key, value in profile_data.items():
            if value is not None and hasattr(current_user, key):
                setattr(current_user, key, value)
        await db.commit()
        await db.refresh(current_user)

    logger.info(f"Profile updated for user {current_user.id}")
    return await get_user_profile(current_user, db)


async def update_client_profile(current_user: User, profile_data: dict, db: AsyncSession) -> ClientProfileResponse:
    """Update address, emergency contact and care notes of a client."""
    profile = await _get_client_profile(current_user, db)
    if profile is None:
        raise ProfileError(GlobalMessages.CLIENT_PROFILE_NOT_FOUND)

    async with query_errors(db, "update client profile"):
        for key, value in profile_data.items():
            if value is not None:
                setattr(profile, key, value)
        await db.commit()
        await db.refresh(profile)

    return ClientProfileResponse.model_validate(profile)
