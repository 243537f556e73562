# src/modules/bookings/bookings_controller.py
"""Bookings controller with API routes."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.auth_service import get_user_row
from src.auth.dependencies import get_current_identity, get_optional_identity
from src.common.database.database import get_db_session
from src.common.utils.email_service import send_booking_confirmation_email
from src.common.utils.global_messages import GlobalMessages
from src.models.models import AuthIdentity, BookingStatus
from src.modules.caregivers.caregivers_service import get_caregiver_profile
from src.modules.catalog import catalog_service
from src.modules.catalog.schemas import ServiceResponse

from . import bookings_service as service
from .booking_wizard import DEFAULT_DURATION, DURATION_OPTIONS, TIME_SLOTS, run_checkout
from .schemas import (
    BookingActionResponse, BookingCheckoutOptions, BookingCheckoutRequest,
    BookingCheckoutResponse, BookingCreateRequest, BookingListResponse,
    BookingResponse, BookingStatusUpdateRequest
)

router = APIRouter(prefix="/bookings", tags=["Bookings"])

wizard_router = APIRouter(prefix="/client/book-service", tags=["Client"])


async def _set_status(db: AsyncSession, booking_id: UUID, new_status: BookingStatus) -> BookingActionResponse:
    if not await service.update_booking_status(db, booking_id, new_status):
        raise HTTPException(status_code=404, detail=GlobalMessages.BOOKING_NOT_FOUND)
    booking = await service.get_booking(db, booking_id)
    return BookingActionResponse(
        success=True,
        message=f"Booking {new_status.value}",
        booking=booking
    )


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    request: BookingCreateRequest,
    db: AsyncSession = Depends(get_db_session),
    identity: Optional[AuthIdentity] = Depends(get_optional_identity)
):
    """Create a pending booking for the signed-in client."""
    booking = await service.create_booking(db, identity, request)
    return await service.get_booking(db, booking.id)


@router.get("/client", response_model=BookingListResponse)
async def get_client_bookings(
    db: AsyncSession = Depends(get_db_session),
    identity: Optional[AuthIdentity] = Depends(get_optional_identity)
):
    """Bookings of the signed-in client, earliest first."""
    client = await service.get_client_profile(db, identity)
    bookings = await service.get_client_bookings(db, client.id)
    return BookingListResponse(bookings=bookings, total=len(bookings))


@router.get("/caregiver", response_model=BookingListResponse)
async def get_caregiver_bookings(
    db: AsyncSession = Depends(get_db_session),
    identity: Optional[AuthIdentity] = Depends(get_optional_identity)
):
    """Bookings of the signed-in caregiver, earliest first."""
    caregiver = await get_caregiver_profile(db, identity)
    bookings = await service.get_caregiver_bookings(db, caregiver.id)
    return BookingListResponse(bookings=bookings, total=len(bookings))


@router.get("/requests", response_model=BookingListResponse)
async def get_job_requests(
    db: AsyncSession = Depends(get_db_session),
    identity: Optional[AuthIdentity] = Depends(get_optional_identity)
):
    """Pending requests for the signed-in caregiver, newest first."""
    caregiver = await get_caregiver_profile(db, identity)
    bookings = await service.get_caregiver_job_requests(db, caregiver.id)
    return BookingListResponse(bookings=bookings, total=len(bookings))


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: UUID,
    db: AsyncSession = Depends(get_db_session),
    identity: AuthIdentity = Depends(get_current_identity)
):
    booking = await service.get_booking(db, booking_id)
    if not booking:
        raise HTTPException(status_code=404, detail=GlobalMessages.BOOKING_NOT_FOUND)
    return booking


@router.put("/{booking_id}/status", response_model=BookingActionResponse)
async def update_booking_status(
    booking_id: UUID,
    request: BookingStatusUpdateRequest,
    db: AsyncSession = Depends(get_db_session),
    identity: AuthIdentity = Depends(get_current_identity)
):
    """Set any status on a booking."""
    return await _set_status(db, booking_id, request.status)


@router.post("/{booking_id}/accept", response_model=BookingActionResponse)
async def accept_booking(
    booking_id: UUID,
    db: AsyncSession = Depends(get_db_session),
    identity: AuthIdentity = Depends(get_current_identity)
):
    """Accept a job request."""
    return await _set_status(db, booking_id, BookingStatus.CONFIRMED)


@router.post("/{booking_id}/decline", response_model=BookingActionResponse)
async def decline_booking(
    booking_id: UUID,
    db: AsyncSession = Depends(get_db_session),
    identity: AuthIdentity = Depends(get_current_identity)
):
    """Decline a job request."""
    return await _set_status(db, booking_id, BookingStatus.CANCELLED)


# ============================================================================
# BOOK-SERVICE WIZARD
# ============================================================================

@wizard_router.get("", response_model=BookingCheckoutOptions)
async def get_checkout_options(db: AsyncSession = Depends(get_db_session)):
    """Services, time slots and durations offered by the booking form."""
    services = await catalog_service.get_services(db)
    return BookingCheckoutOptions(
        services=[ServiceResponse.model_validate(s) for s in services],
        time_slots=TIME_SLOTS,
        durations=DURATION_OPTIONS,
        default_duration=DEFAULT_DURATION,
    )


@wizard_router.post("", response_model=BookingCheckoutResponse, status_code=status.HTTP_201_CREATED)
async def checkout(
    request: BookingCheckoutRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db_session),
    identity: Optional[AuthIdentity] = Depends(get_optional_identity)
):
    """
    Submit the book-service form.

    Each step is checked in order; the first incomplete one is reported as a
    422. On success the client is sent back to their dashboard.
    """
    booking = await run_checkout(db, identity, request)
    booking_response = await service.get_booking(db, booking.id)

    user = await get_user_row(identity, db)
    caregiver = booking_response.caregiver
    background_tasks.add_task(
        send_booking_confirmation_email,
        user.email,
        user.first_name,
        f"{caregiver.first_name} {caregiver.last_name}" if caregiver else "your caregiver",
        booking_response.service_date.strftime("%A, %B %d, %Y"),
        booking_response.start_time.strftime("%I:%M %p").lstrip("0"),
        booking_response.total_amount,
    )

    return BookingCheckoutResponse(
        success=True,
        message=GlobalMessages.BOOKING_CREATED,
        booking=booking_response,
    )
