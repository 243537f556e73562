# src/auth/auth_provider.py
"""
Identity and session store.

Plays the part of a hosted auth provider: it knows about emails, password
hashes, sessions and bearer tokens, and nothing about users, roles or
profiles. Every failure is reported as an AuthError carrying the message a
client should see.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
from uuid import UUID

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from src.common.config import settings
from src.common.exceptions import AuthError
from src.common.utils.global_messages import GlobalMessages
from src.models.models import AuthIdentity, AuthSession

logger = logging.getLogger(__name__)

# Initialize the password context (bcrypt)
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify that the provided password matches the hashed password."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: timedelta = None) -> str:
    """Create a JWT token including an expiration date."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta if expires_delta else timedelta(minutes=15))
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str) -> Tuple[UUID, UUID]:
    """Return (identity_id, session_id) from a bearer token."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        identity_id = payload.get("sub")
        session_id = payload.get("sid")
        if identity_id is None or session_id is None:
            raise AuthError(GlobalMessages.INVALID_TOKEN)
        return UUID(identity_id), UUID(session_id)
    except ExpiredSignatureError:
        raise AuthError(GlobalMessages.TOKEN_EXPIRED)
    except (InvalidTokenError, ValueError):
        raise AuthError(GlobalMessages.INVALID_TOKEN)


async def create_identity(email: str, password: str, db: AsyncSession) -> AuthIdentity:
    """
    Register a new identity and commit it immediately.

    The identity outlives any later failure while creating profile rows.
    """
    result = await db.execute(select(AuthIdentity).where(AuthIdentity.email == email))
    if result.scalars().first():
        raise AuthError(GlobalMessages.ACCOUNT_ALREADY_EXISTS)

    identity = AuthIdentity(email=email, password_hash=hash_password(password))
    db.add(identity)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise AuthError(GlobalMessages.ACCOUNT_ALREADY_EXISTS)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Identity creation failed for {email}: {e}")
        raise AuthError(GlobalMessages.SIGNUP_FAILED) from e
    return identity


async def open_session(identity: AuthIdentity, db: AsyncSession) -> Tuple[AuthSession, str]:
    """Start a session for the identity and return it with its access token."""
    email = identity.email
    expires_delta = timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)
    now = datetime.now(timezone.utc)
    auth_session = AuthSession(identity_id=identity.id, expires_at=now + expires_delta)
    identity.last_sign_in_at = now
    db.add(auth_session)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Could not open session for {email}: {e}")
        raise AuthError(GlobalMessages.SESSION_FAILED) from e

    access_token = create_access_token(
        data={"sub": str(identity.id), "sid": str(auth_session.id)},
        expires_delta=expires_delta,
    )
    return auth_session, access_token


async def sign_in_with_password(
    email: str,
    password: str,
    db: AsyncSession
) -> Tuple[AuthIdentity, AuthSession, str]:
    """Check credentials and open a session."""
    result = await db.execute(select(AuthIdentity).where(AuthIdentity.email == email))
    identity = result.scalars().first()

    if not identity or not verify_password(password, identity.password_hash):
        raise AuthError(GlobalMessages.INVALID_CREDENTIALS)

    auth_session, access_token = await open_session(identity, db)
    return identity, auth_session, access_token


async def _get_live_session(token: str, db: AsyncSession) -> AuthSession:
    identity_id, session_id = decode_access_token(token)
    result = await db.execute(
        select(AuthSession)
        .where(AuthSession.id == session_id)
        .where(AuthSession.identity_id == identity_id)
    )
    auth_session = result.scalars().first()
    if auth_session is None or auth_session.revoked_at is not None:
        raise AuthError(GlobalMessages.SESSION_NOT_FOUND)
    return auth_session


async def sign_out(token: Optional[str], db: AsyncSession) -> None:
    """Revoke the session behind the token."""
    if not token:
        raise AuthError(GlobalMessages.AUTH_SESSION_MISSING)

    auth_session = await _get_live_session(token, db)
    session_id = auth_session.id
    auth_session.revoked_at = datetime.now(timezone.utc)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Could not revoke session {session_id}: {e}")
        raise AuthError(GlobalMessages.SIGNOUT_FAILED) from e


async def get_identity(token: Optional[str], db: AsyncSession) -> Optional[AuthIdentity]:
    """
    Resolve the identity behind a bearer token.

    Returns None when no token is presented at all; a token that is
    malformed, expired or revoked is an AuthError.
    """
    if not token:
        return None

    auth_session = await _get_live_session(token, db)
    result = await db.execute(
        select(AuthIdentity).where(AuthIdentity.id == auth_session.identity_id)
    )
    identity = result.scalars().first()
    if identity is None:
        raise AuthError(GlobalMessages.SESSION_NOT_FOUND)
    return identity
