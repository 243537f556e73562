# src/modules/dashboard/dashboard_service.py
"""Dashboard service: aggregates bookings for the client and caregiver home pages."""

from datetime import date
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.schemas import UserProfileResponse
from src.models.models import AuthIdentity, BookingStatus, User
from src.modules.bookings import bookings_service
from src.modules.bookings.bookings_service import ACTIVE_STATUSES
from src.modules.bookings.schemas import BookingResponse
from src.modules.caregivers import caregivers_service

from .schemas import (
    CaregiverDashboardResponse, CaregiverStats, ClientDashboardResponse,
    ClientListResponse, ClientSummary, ClientUserInfo, ScheduleResponse
)

RECOMMENDED_CAREGIVERS = 3
UPCOMING_LIMIT = 5


def completed_earnings(bookings: Sequence[BookingResponse]) -> float:
    """Sum of total_amount over completed bookings."""
    return sum(b.total_amount for b in bookings if b.status == BookingStatus.COMPLETED)


def active_bookings(bookings: Sequence[BookingResponse]) -> List[BookingResponse]:
    return [b for b in bookings if b.status in ACTIVE_STATUSES]


def group_by_client(bookings: Sequence[BookingResponse]) -> List[ClientSummary]:
    """
    Fold a caregiver's bookings into one summary per client, in order of
    first appearance. The last booking is the one with the latest service
    date; on a tie the earlier one is kept.
    """
    clients: Dict[UUID, ClientSummary] = {}

    for booking in bookings:
        if booking.client is None:
            continue

        summary = clients.get(booking.client_id)
        if summary is None:
            summary = ClientSummary(
                client_id=booking.client_id,
                user=ClientUserInfo(
                    user_id=booking.client.user_id,
                    first_name=booking.client.first_name,
                    last_name=booking.client.last_name,
                    avatar_url=booking.client.avatar_url,
                ),
            )
            clients[booking.client_id] = summary

        summary.total_bookings += 1
        if booking.status == BookingStatus.COMPLETED:
            summary.completed_bookings += 1
            summary.total_earnings += booking.total_amount

        if summary.last_booking is None or booking.service_date > summary.last_booking.service_date:
            summary.last_booking = booking

        for line in booking.services:
            if line.name and line.name not in summary.services:
                summary.services.append(line.name)

    return list(clients.values())


def search_clients(clients: List[ClientSummary], search: Optional[str]) -> List[ClientSummary]:
    """Case-insensitive match on the client's full name."""
    if not search:
        return clients
    query = search.lower()
    return [c for c in clients if query in c.full_name.lower()]


def build_schedule(
    bookings: Sequence[BookingResponse],
    selected_date: date,
    today: date
) -> ScheduleResponse:
    """`bookings` must already be ordered by service date."""
    upcoming = [b for b in bookings if b.service_date >= today]
    return ScheduleResponse(
        selected_date=selected_date,
        bookings_on_date=[b for b in bookings if b.service_date == selected_date],
        upcoming_bookings=upcoming[:UPCOMING_LIMIT],
        total_bookings=len(bookings),
        completed_count=sum(1 for b in bookings if b.status == BookingStatus.COMPLETED),
        upcoming_count=len(upcoming),
        total_earnings=completed_earnings(bookings),
    )


async def get_client_dashboard(
    session: AsyncSession,
    identity: AuthIdentity,
    user: User
) -> ClientDashboardResponse:
    client = await bookings_service.get_client_profile(session, identity)
    bookings = await bookings_service.get_client_bookings(session, client.id)
    caregivers = await caregivers_service.get_available_caregivers(session)

    return ClientDashboardResponse(
        user=UserProfileResponse.model_validate(user),
        active_bookings=active_bookings(bookings),
        recommended_caregivers=caregivers[:RECOMMENDED_CAREGIVERS],
    )


async def get_caregiver_dashboard(
    session: AsyncSession,
    identity: AuthIdentity,
    user: User
) -> CaregiverDashboardResponse:
    caregiver = await caregivers_service.get_caregiver_profile(session, identity)
    bookings = await bookings_service.get_caregiver_bookings(session, caregiver.id)
    requests = await bookings_service.get_caregiver_job_requests(session, caregiver.id)

    return CaregiverDashboardResponse(
        user=UserProfileResponse.model_validate(user),
        caregiver_id=caregiver.id,
        is_available=caregiver.is_available,
        stats=CaregiverStats(
            completed_jobs=sum(1 for b in bookings if b.status == BookingStatus.COMPLETED),
            rating=caregiver.rating or 0.0,
            total_reviews=caregiver.total_reviews or 0,
            total_earnings=completed_earnings(bookings),
        ),
        upcoming_jobs=active_bookings(bookings),
        job_requests=requests,
    )


async def get_caregiver_schedule(
    session: AsyncSession,
    identity: AuthIdentity,
    selected_date: Optional[date] = None
) -> ScheduleResponse:
    caregiver = await caregivers_service.get_caregiver_profile(session, identity)
    bookings = await bookings_service.get_caregiver_bookings(session, caregiver.id)
    today = date.today()
    return build_schedule(bookings, selected_date or today, today)


async def get_caregiver_clients(
    session: AsyncSession,
    identity: AuthIdentity,
    search: Optional[str] = None
) -> ClientListResponse:
    caregiver = await caregivers_service.get_caregiver_profile(session, identity)
    bookings = await bookings_service.get_caregiver_bookings(session, caregiver.id)
    clients = search_clients(group_by_client(bookings), search)
    return ClientListResponse(clients=clients, total=len(clients))
