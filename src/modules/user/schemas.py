# src/modules/user/schemas.py

from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field
from uuid import UUID
from datetime import datetime

from src.models.models import UserRole


class ClientProfileResponse(BaseModel):
    id: UUID
    address: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    medical_conditions: Optional[List[str]] = None
    special_instructions: Optional[str] = None

    class Config:
        from_attributes = True


class ProfileResponse(BaseModel):
    id: UUID
    email: EmailStr
    role: UserRole
    first_name: str
    last_name: str
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    client_profile: Optional[ClientProfileResponse] = None


class UpdateProfileRequest(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    avatar_url: Optional[str] = Field(None, max_length=500)


class UpdateClientProfileRequest(BaseModel):
    address: Optional[str] = None
    emergency_contact_name: Optional[str] = Field(None, max_length=200)
    emergency_contact_phone: Optional[str] = Field(None, max_length=20)
    medical_conditions: Optional[List[str]] = None
    special_instructions: Optional[str] = None
