# src/modules/caregivers/schemas.py
"""Caregivers module Pydantic schemas."""

from typing import Optional, List
from uuid import UUID
from enum import Enum
from pydantic import BaseModel, Field

from src.models.models import CaregiverStatus


class ExperienceLevel(str, Enum):
    """Experience buckets offered by the caregiver search."""
    JUNIOR = "0-2"
    MID = "3-5"
    SENIOR = "5+"


class CaregiverUserInfo(BaseModel):
    first_name: str
    last_name: str
    avatar_url: Optional[str] = None


class CaregiverServiceInfo(BaseModel):
    service_id: UUID
    name: str
    custom_rate: Optional[float] = None


class CaregiverResponse(BaseModel):
    """Caregiver profile joined with user info and offered services."""
    id: UUID
    user_id: UUID
    user: CaregiverUserInfo
    bio: Optional[str] = None
    experience_years: Optional[int] = None
    hourly_rate: Optional[float] = None
    service_radius: Optional[int] = None
    zip_code: Optional[str] = None
    status: CaregiverStatus
    rating: float = 0.0
    total_reviews: int = 0
    total_jobs_completed: int = 0
    background_check_verified: bool = False
    is_available: bool = True
    services: List[CaregiverServiceInfo] = []

    @property
    def full_name(self) -> str:
        return f"{self.user.first_name} {self.user.last_name}"


class CaregiverListResponse(BaseModel):
    caregivers: List[CaregiverResponse]
    total: int


class AvailabilityUpdateRequest(BaseModel):
    is_available: bool


class AvailabilityUpdateResponse(BaseModel):
    success: bool
    is_available: bool


class CaregiverSearchParams(BaseModel):
    """Filters from the client's "find caregivers" page."""
    search: Optional[str] = None
    service_ids: List[UUID] = []
    min_price: float = Field(default=0, ge=0)
    max_price: float = Field(default=100, ge=0)
    min_rating: float = Field(default=0, ge=0, le=5)
    experience_level: Optional[ExperienceLevel] = None
