# src/modules/user/user_controller.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.modules.user import user_service, schemas
from src.common.database.database import get_db_session
from src.models.models import User
from src.auth.dependencies import get_current_user

router = APIRouter(prefix="/user", tags=["user"])


@router.get("/profile", response_model=schemas.ProfileResponse)
async def get_profile(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """
    Retrieve the profile for the currently authenticated user.
    """
    return await user_service.get_user_profile(current_user, db)


@router.put("/profile", response_model=schemas.ProfileResponse)
async def update_profile(
    profile_data: schemas.UpdateProfileRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """
    Update the profile of the currently authenticated user.

    Only the provided fields will be updated.
    """
    return await user_service.update_user_profile(current_user, profile_data.model_dump(), db)


@router.put("/client-profile", response_model=schemas.ClientProfileResponse)
async def update_client_profile(
    profile_data: schemas.UpdateClientProfileRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """
    Update the client's address, emergency contact, medical conditions
    and special instructions.
    """
    return await user_service.update_client_profile(current_user, profile_data.model_dump(), db)
