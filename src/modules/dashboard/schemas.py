# src/modules/dashboard/schemas.py
"""Pydantic schemas for the client and caregiver dashboards."""

from datetime import date
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.auth.schemas import UserProfileResponse
from src.modules.bookings.schemas import BookingResponse
from src.modules.caregivers.schemas import CaregiverResponse


# ============================================================================
# CLIENT
# ============================================================================

class ClientDashboardResponse(BaseModel):
    user: UserProfileResponse
    active_bookings: List[BookingResponse]  # pending or confirmed
    recommended_caregivers: List[CaregiverResponse]


# ============================================================================
# CAREGIVER
# ============================================================================

class CaregiverStats(BaseModel):
    completed_jobs: int
    rating: float
    total_reviews: int
    total_earnings: float


class CaregiverDashboardResponse(BaseModel):
    user: UserProfileResponse
    caregiver_id: UUID
    is_available: bool
    stats: CaregiverStats
    upcoming_jobs: List[BookingResponse]
    job_requests: List[BookingResponse]


class ScheduleResponse(BaseModel):
    selected_date: date
    bookings_on_date: List[BookingResponse]
    upcoming_bookings: List[BookingResponse]  # next five from today on
    total_bookings: int
    completed_count: int
    upcoming_count: int
    total_earnings: float


class ClientUserInfo(BaseModel):
    user_id: UUID
    first_name: str
    last_name: str
    avatar_url: Optional[str] = None


class ClientSummary(BaseModel):
    """One client of a caregiver, aggregated over their bookings."""
    client_id: UUID
    user: ClientUserInfo
    total_bookings: int = 0
    completed_bookings: int = 0
    total_earnings: float = 0.0
    last_booking: Optional[BookingResponse] = None
    services: List[str] = []

    @property
    def full_name(self) -> str:
        return f"{self.user.first_name} {self.user.last_name}"


class ClientListResponse(BaseModel):
    clients: List[ClientSummary]
    total: int
