# src/auth/schemas.py

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field

from src.models.models import UserRole


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    role: UserRole = UserRole.CLIENT


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class UserProfileResponse(BaseModel):
    """Row from the users table."""
    id: UUID
    email: EmailStr
    first_name: str
    last_name: str
    phone: Optional[str] = None
    role: UserRole
    avatar_url: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class IdentityResponse(BaseModel):
    """Identity as known to the auth provider."""
    id: UUID
    email: EmailStr
    created_at: datetime
    last_sign_in_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SessionResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    expires_at: datetime


class AuthResponse(BaseModel):
    """Returned by sign-up and sign-in."""
    user: IdentityResponse
    session: SessionResponse


class SignupResponse(AuthResponse):
    message: str = "Account created successfully."
    profile: UserProfileResponse
    redirect_to: str


class CurrentUserResponse(IdentityResponse):
    """The identity merged with its users row."""
    profile: UserProfileResponse


class LogoutResponse(BaseModel):
    message: str
