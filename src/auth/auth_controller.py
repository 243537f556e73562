# src/auth/auth_controller.py

from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.dependencies import get_access_token
from src.common.database.database import get_db_session
from src.common.exceptions import AuthError
from src.common.utils.global_messages import GlobalMessages
from src.auth import auth_service, schemas

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=schemas.SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    signup_data: schemas.SignupRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Register a new account.

    - **email** / **password**: credentials for the auth provider
    - **first_name**, **last_name**, **phone**: stored on the users row
    - **role**: client, caregiver or admin; clients and caregivers also get a role profile
    """
    return await auth_service.sign_up(
        email=signup_data.email,
        password=signup_data.password,
        first_name=signup_data.first_name,
        last_name=signup_data.last_name,
        phone=signup_data.phone,
        role=signup_data.role,
        db=db,
        background_tasks=background_tasks,
    )


@router.post("/login", response_model=schemas.AuthResponse)
async def login(
    credentials: schemas.LoginRequest,
    db: AsyncSession = Depends(get_db_session)
):
    """
    Sign in with email and password and receive a bearer token.
    """
    return await auth_service.sign_in(credentials.email, credentials.password, db)


@router.post("/logout", response_model=schemas.LogoutResponse)
async def logout(
    token: Optional[str] = Depends(get_access_token),
    db: AsyncSession = Depends(get_db_session)
):
    """Revoke the session behind the bearer token."""
    await auth_service.sign_out(token, db)
    return schemas.LogoutResponse(message=GlobalMessages.LOGOUT_SUCCESS)


@router.get("/me", response_model=schemas.CurrentUserResponse)
async def get_current_user_info(
    token: Optional[str] = Depends(get_access_token),
    db: AsyncSession = Depends(get_db_session)
):
    """
    Get the signed-in identity together with its profile.
    """
    current_user = await auth_service.get_current_user(token, db)
    if current_user is None:
        raise AuthError(GlobalMessages.NOT_AUTHENTICATED)
    return current_user
