# src/auth/auth_service.py

import logging
from typing import Optional

from fastapi import BackgroundTasks
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from src.auth import auth_provider
from src.auth.schemas import (
    AuthResponse, CurrentUserResponse, IdentityResponse, SessionResponse,
    SignupResponse, UserProfileResponse,
)
from src.common.config import settings
from src.common.exceptions import ProfileError
from src.common.utils.email_service import send_welcome_email
from src.common.utils.global_messages import GlobalMessages
from src.models.models import (
    AuthIdentity, AuthSession, User, UserRole, ClientProfile, CaregiverProfile
)

logger = logging.getLogger(__name__)

# Where the frontend sends a freshly registered user
SIGNUP_REDIRECTS = {
    UserRole.CLIENT: "/client/dashboard",
    UserRole.CAREGIVER: "/caregiver/onboarding",
    UserRole.ADMIN: "/",
}


def build_auth_response(
    identity: AuthIdentity,
    auth_session: AuthSession,
    access_token: str
) -> AuthResponse:
    return AuthResponse(
        user=IdentityResponse.model_validate(identity),
        session=SessionResponse(
            access_token=access_token,
            expires_in=settings.JWT_EXPIRATION_MINUTES * 60,
            expires_at=auth_session.expires_at,
        ),
    )


async def create_user_profile(
    identity: AuthIdentity,
    first_name: str,
    last_name: str,
    phone: Optional[str],
    role: UserRole,
    db: AsyncSession
) -> User:
    """Insert the users row and the role-specific profile row."""
    identity_id = identity.id
    user = User(
        id=identity.id,
        email=identity.email,
        first_name=first_name,
        last_name=last_name,
        phone=phone,
        role=role,
    )
    db.add(user)

    # Admin doesn't get a role-specific profile
    if role == UserRole.CLIENT:
        db.add(ClientProfile(user_id=identity.id))
    elif role == UserRole.CAREGIVER:
        db.add(CaregiverProfile(user_id=identity.id))

    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Profile creation failed for identity {identity_id}: {e}")
        raise ProfileError(GlobalMessages.PROFILE_CREATE_FAILED) from e
    return user


async def sign_up(
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    phone: Optional[str],
    role: UserRole,
    db: AsyncSession,
    background_tasks: Optional[BackgroundTasks] = None
) -> SignupResponse:
    """
    Register an account.

    - Client role: identity + users row + client_profiles row
    - Caregiver role: identity + users row + caregiver_profiles row
    - Admin role: identity + users row only

    The identity is committed before the profile rows, so a ProfileError
    leaves it in place.
    """
    identity = await auth_provider.create_identity(email, password, db)
    user = await create_user_profile(identity, first_name, last_name, phone, role, db)
    auth_session, access_token = await auth_provider.open_session(identity, db)

    logger.info(f"Registered {role.value} account {identity.id}")

    if background_tasks is not None:
        background_tasks.add_task(send_welcome_email, user.email, user.first_name, role.value)

    auth = build_auth_response(identity, auth_session, access_token)
    return SignupResponse(
        user=auth.user,
        session=auth.session,
        profile=UserProfileResponse.model_validate(user),
        redirect_to=SIGNUP_REDIRECTS[role],
    )


async def sign_in(email: str, password: str, db: AsyncSession) -> AuthResponse:
    """Authenticate with email and password."""
    identity, auth_session, access_token = await auth_provider.sign_in_with_password(email, password, db)
    logger.info(f"Identity {identity.id} signed in")
    return build_auth_response(identity, auth_session, access_token)


async def sign_out(access_token: Optional[str], db: AsyncSession) -> None:
    await auth_provider.sign_out(access_token, db)
    logger.info("Session revoked")


async def get_user_row(identity: AuthIdentity, db: AsyncSession) -> User:
    """Fetch the users row for an identity; ProfileError if it is missing."""
    try:
        result = await db.execute(select(User).where(User.id == identity.id))
        user = result.scalars().first()
    except SQLAlchemyError as e:
        logger.error(f"Profile lookup failed for identity {identity.id}: {e}")
        raise ProfileError(GlobalMessages.USER_NOT_FOUND) from e

    if user is None:
        raise ProfileError(GlobalMessages.USER_NOT_FOUND)
    return user


async def get_current_user(
    access_token: Optional[str],
    db: AsyncSession
) -> Optional[CurrentUserResponse]:
    """Return the signed-in identity merged with its profile, or None without a session."""
    identity = await auth_provider.get_identity(access_token, db)
    if identity is None:
        return None

    user = await get_user_row(identity, db)
    return CurrentUserResponse(
        **IdentityResponse.model_validate(identity).model_dump(),
        profile=UserProfileResponse.model_validate(user),
    )
