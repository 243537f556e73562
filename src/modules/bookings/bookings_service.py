# src/modules/bookings/bookings_service.py

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.common.database.database import query_errors
from src.common.exceptions import AuthError, ProfileError
from src.common.utils.global_messages import GlobalMessages
from src.models.models import (
    AuthIdentity, Booking, BookingService, BookingStatus,
    CaregiverProfile, ClientProfile, utcnow
)
from .schemas import (
    BookingCreateRequest, BookingParty, BookingResponse, BookingServiceLine
)

logger = logging.getLogger(__name__)

# Statuses that still need the caregiver's attention
ACTIVE_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)


def _party(profile) -> Optional[BookingParty]:
    if profile is None or profile.user is None:
        return None
    return BookingParty(
        profile_id=profile.id,
        user_id=profile.user_id,
        first_name=profile.user.first_name,
        last_name=profile.user.last_name,
        avatar_url=profile.user.avatar_url,
    )


def build_booking_response(booking: Booking) -> BookingResponse:
    """Flatten a fully loaded booking into its API shape."""
    return BookingResponse(
        id=booking.id,
        client_id=booking.client_id,
        caregiver_id=booking.caregiver_id,
        service_date=booking.service_date,
        start_time=booking.start_time,
        end_time=booking.end_time,
        duration_hours=booking.duration_hours,
        total_amount=booking.total_amount,
        status=booking.status,
        service_address=booking.service_address,
        special_instructions=booking.special_instructions,
        created_at=booking.created_at,
        client=_party(booking.client),
        caregiver=_party(booking.caregiver),
        services=[
            BookingServiceLine(
                service_id=line.service_id,
                name=line.service.name if line.service else "",
                rate=line.rate,
            )
            for line in booking.booking_services
        ],
    )


def _booking_query():
    return (
        select(Booking)
        .options(
            selectinload(Booking.booking_services).selectinload(BookingService.service),
            selectinload(Booking.client).selectinload(ClientProfile.user),
            selectinload(Booking.caregiver).selectinload(CaregiverProfile.user),
        )
        .execution_options(populate_existing=True)
    )


async def _load_bookings(session: AsyncSession, stmt, action: str) -> List[BookingResponse]:
    async with query_errors(session, action):
        result = await session.execute(stmt)
        bookings = result.scalars().all()
    return [build_booking_response(b) for b in bookings]


async def get_client_profile(
    session: AsyncSession,
    identity: Optional[AuthIdentity]
) -> ClientProfile:
    """Resolve the caller's client profile."""
    if identity is None:
        raise AuthError(GlobalMessages.NOT_AUTHENTICATED)

    async with query_errors(session, "load client profile"):
        result = await session.execute(
            select(ClientProfile).where(ClientProfile.user_id == identity.id)
        )
        profile = result.scalar_one_or_none()
    if not profile:
        raise ProfileError(GlobalMessages.CLIENT_PROFILE_NOT_FOUND)
    return profile


async def create_booking(
    session: AsyncSession,
    identity: Optional[AuthIdentity],
    data: BookingCreateRequest
) -> Booking:
    """
    Create a pending booking for the caller's client profile.

    The booking row is committed before its service lines. If inserting the
    lines fails the booking stays behind without them and the QueryError
    still reaches the caller. Every line gets the same rate:
    total_amount / duration_hours / number of services.
    """
    client = await get_client_profile(session, identity)

    booking = Booking(
        client_id=client.id,
        caregiver_id=data.caregiver_id,
        service_date=data.service_date,
        start_time=data.start_time,
        end_time=data.end_time,
        duration_hours=data.duration_hours,
        total_amount=data.total_amount,
        status=BookingStatus.PENDING,
        service_address=data.service_address,
        special_instructions=data.special_instructions,
    )
    async with query_errors(session, "create booking"):
        session.add(booking)
        await session.commit()

    booking_id = booking.id
    if data.service_ids:
        rate = data.total_amount / data.duration_hours / len(data.service_ids)
        async with query_errors(session, "add booking services"):
            session.add_all([
                BookingService(booking_id=booking_id, service_id=service_id, rate=rate)
                for service_id in data.service_ids
            ])
            await session.commit()

    logger.info(f"Booking {booking_id} created for client {client.id} with caregiver {data.caregiver_id}")
    return booking


async def get_booking(session: AsyncSession, booking_id: UUID) -> Optional[BookingResponse]:
    bookings = await _load_bookings(
        session, _booking_query().where(Booking.id == booking_id), "load booking"
    )
    return bookings[0] if bookings else None


async def get_client_bookings(session: AsyncSession, client_id: UUID) -> List[BookingResponse]:
    """Bookings of a client profile, earliest service date first."""
    return await _load_bookings(
        session,
        _booking_query()
        .where(Booking.client_id == client_id)
        .order_by(Booking.service_date.asc(), Booking.start_time.asc()),
        "load client bookings",
    )


async def get_caregiver_bookings(session: AsyncSession, caregiver_id: UUID) -> List[BookingResponse]:
    """Bookings of a caregiver profile, earliest service date first."""
    return await _load_bookings(
        session,
        _booking_query()
        .where(Booking.caregiver_id == caregiver_id)
        .order_by(Booking.service_date.asc(), Booking.start_time.asc()),
        "load caregiver bookings",
    )


async def get_caregiver_job_requests(session: AsyncSession, caregiver_id: UUID) -> List[BookingResponse]:
    """Pending bookings of a caregiver, newest request first."""
    return await _load_bookings(
        session,
        _booking_query()
        .where(Booking.caregiver_id == caregiver_id)
        .where(Booking.status == BookingStatus.PENDING)
        .order_by(Booking.created_at.desc()),
        "load job requests",
    )


async def update_booking_status(
    session: AsyncSession,
    booking_id: UUID,
    status: BookingStatus
) -> bool:
    """
    Overwrite a booking's status.

    Any status may follow any other. Returns False when no booking has the id.
    """
    async with query_errors(session, "update booking status"):
        result = await session.execute(
            update(Booking)
            .where(Booking.id == booking_id)
            .values(status=status, updated_at=utcnow())
        )
        await session.commit()

    if result.rowcount == 0:
        return False
    logger.info(f"Booking {booking_id} set to {status.value}")
    return True
