# src/auth/dependencies.py

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth import auth_provider
from src.auth.auth_service import get_user_row
from src.common.database.database import get_db_session
from src.common.exceptions import AuthError
from src.common.utils.global_messages import GlobalMessages
from src.models.models import AuthIdentity, User

# auto_error=False so that a missing header means "no session" instead of a 403
bearer_scheme = HTTPBearer(auto_error=False)


async def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """Extract the raw bearer token, if any."""
    return credentials.credentials if credentials else None


async def get_optional_identity(
    token: Optional[str] = Depends(get_access_token),
    db: AsyncSession = Depends(get_db_session)
) -> Optional[AuthIdentity]:
    """
    Identity behind the bearer token, or None when no token was sent.

    Services that require a session raise AuthError themselves when handed None.
    """
    return await auth_provider.get_identity(token, db)


async def get_current_identity(
    identity: Optional[AuthIdentity] = Depends(get_optional_identity),
) -> AuthIdentity:
    if identity is None:
        raise AuthError(GlobalMessages.NOT_AUTHENTICATED)
    return identity


async def get_current_user(
    identity: AuthIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session)
) -> User:
    """
    Dependency to retrieve the users row of the signed-in identity.
    """
    return await get_user_row(identity, db)
