# src/modules/bookings/schemas.py
"""Bookings module Pydantic schemas."""

from typing import Optional, List
from datetime import date, time, datetime
from uuid import UUID
from pydantic import BaseModel, Field

from src.models.models import BookingStatus
from src.modules.catalog.schemas import ServiceResponse


# ============================================================================
# REQUEST SCHEMAS
# ============================================================================

class BookingCreateRequest(BaseModel):
    """Everything needed to insert a booking and its service lines."""
    caregiver_id: UUID
    service_date: date
    start_time: time
    end_time: time
    duration_hours: int = Field(..., ge=1, le=24)
    total_amount: float = Field(..., ge=0)
    service_address: str = Field(..., min_length=1)
    special_instructions: Optional[str] = None
    service_ids: List[UUID] = Field(..., min_length=1)


class BookingStatusUpdateRequest(BaseModel):
    status: BookingStatus


class BookingCheckoutRequest(BaseModel):
    """Payload of the book-service wizard, one field group per step."""
    # Step 1
    service_ids: List[UUID] = []
    # Step 2
    service_date: Optional[date] = None
    time_slot: Optional[str] = Field(None, description='One of the offered slots, e.g. "9:00 AM"')
    duration_hours: int = Field(default=2, ge=1, le=4)
    # Step 2.5
    caregiver_id: Optional[UUID] = None
    # Step 3
    service_address: str = ""
    special_instructions: Optional[str] = None


# ============================================================================
# RESPONSE SCHEMAS
# ============================================================================

class BookingParty(BaseModel):
    """The other side of a booking as shown on a dashboard."""
    profile_id: UUID
    user_id: UUID
    first_name: str
    last_name: str
    avatar_url: Optional[str] = None


class BookingServiceLine(BaseModel):
    service_id: UUID
    name: str
    rate: float


class BookingResponse(BaseModel):
    id: UUID
    client_id: UUID
    caregiver_id: UUID
    service_date: date
    start_time: time
    end_time: time
    duration_hours: int
    total_amount: float
    status: BookingStatus
    service_address: str
    special_instructions: Optional[str] = None
    created_at: datetime
    client: Optional[BookingParty] = None
    caregiver: Optional[BookingParty] = None
    services: List[BookingServiceLine] = []


class BookingListResponse(BaseModel):
    bookings: List[BookingResponse]
    total: int


class BookingActionResponse(BaseModel):
    success: bool
    message: str
    booking: Optional[BookingResponse] = None


class BookingCheckoutOptions(BaseModel):
    """What the wizard needs to render its first two steps."""
    services: List[ServiceResponse]
    time_slots: List[str]
    durations: List[int]
    default_duration: int


class BookingCheckoutResponse(BookingActionResponse):
    redirect_to: str = "/client/dashboard"

