# src/modules/caregivers/caregivers_service.py
"""Caregiver listing, search filters and the availability toggle."""

import logging
from typing import Iterable, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.common.database.database import query_errors
from src.common.exceptions import AuthError, ProfileError
from src.common.utils.global_messages import GlobalMessages
from src.models.models import AuthIdentity, User, CaregiverProfile, CaregiverService
from .schemas import (
    CaregiverResponse, CaregiverUserInfo, CaregiverServiceInfo,
    CaregiverSearchParams, ExperienceLevel
)

logger = logging.getLogger(__name__)

# Inclusive (min, max) years for each experience bucket
EXPERIENCE_RANGES = {
    ExperienceLevel.JUNIOR: (0, 2),
    ExperienceLevel.MID: (3, 5),
    ExperienceLevel.SENIOR: (5, 100),
}


def _build_caregiver_response(profile: CaregiverProfile, user: User) -> CaregiverResponse:
    return CaregiverResponse(
        id=profile.id,
        user_id=profile.user_id,
        user=CaregiverUserInfo(
            first_name=user.first_name,
            last_name=user.last_name,
            avatar_url=user.avatar_url
        ),
        bio=profile.bio,
        experience_years=profile.experience_years,
        hourly_rate=profile.hourly_rate,
        service_radius=profile.service_radius,
        zip_code=profile.zip_code,
        status=profile.status,
        rating=profile.rating or 0.0,
        total_reviews=profile.total_reviews or 0,
        total_jobs_completed=profile.total_jobs_completed or 0,
        background_check_verified=profile.background_check_verified,
        is_available=profile.is_available,
        services=[
            CaregiverServiceInfo(
                service_id=cs.service_id,
                name=cs.service.name if cs.service else "",
                custom_rate=cs.custom_rate
            )
            for cs in profile.services
        ]
    )


def offers_any_service(caregiver: CaregiverResponse, service_ids: Iterable[UUID]) -> bool:
    """True when the caregiver offers at least one of the given services."""
    wanted = set(service_ids)
    return any(cs.service_id in wanted for cs in caregiver.services)


async def get_available_caregivers(
    session: AsyncSession,
    service_ids: Optional[Sequence[UUID]] = None
) -> List[CaregiverResponse]:
    """
    Get caregiver profiles with user info and offered services.

    When service_ids is non-empty only caregivers offering at least one of
    them are returned (OR, not AND).
    """
    async with query_errors(session, "load caregivers"):
        result = await session.execute(
            select(CaregiverProfile, User)
            .join(User, CaregiverProfile.user_id == User.id)
            .options(selectinload(CaregiverProfile.services).selectinload(CaregiverService.service))
            .execution_options(populate_existing=True)
            .order_by(CaregiverProfile.created_at)
        )
        rows = result.all()

    caregivers = [_build_caregiver_response(profile, user) for profile, user in rows]

    if service_ids:
        return [c for c in caregivers if offers_any_service(c, service_ids)]
    return caregivers


async def get_caregiver_by_id(
    session: AsyncSession,
    caregiver_id: UUID
) -> Optional[CaregiverResponse]:
    async with query_errors(session, "load caregiver"):
        result = await session.execute(
            select(CaregiverProfile, User)
            .join(User, CaregiverProfile.user_id == User.id)
            .options(selectinload(CaregiverProfile.services).selectinload(CaregiverService.service))
            .execution_options(populate_existing=True)
            .where(CaregiverProfile.id == caregiver_id)
        )
        row = result.first()
    if not row:
        return None
    profile, user = row
    return _build_caregiver_response(profile, user)


def filter_caregivers(
    caregivers: List[CaregiverResponse],
    params: CaregiverSearchParams
) -> List[CaregiverResponse]:
    """Apply the client search filters in memory."""
    filtered = caregivers

    if params.search:
        query = params.search.lower()
        filtered = [
            c for c in filtered
            if query in c.full_name.lower() or (c.bio and query in c.bio.lower())
        ]

    if params.service_ids:
        filtered = [c for c in filtered if offers_any_service(c, params.service_ids)]

    # A caregiver without a rate yet counts as 0
    filtered = [
        c for c in filtered
        if params.min_price <= (c.hourly_rate or 0) <= params.max_price
    ]

    if params.min_rating > 0:
        filtered = [c for c in filtered if c.rating >= params.min_rating]

    if params.experience_level:
        low, high = EXPERIENCE_RANGES[params.experience_level]
        filtered = [c for c in filtered if low <= (c.experience_years or 0) <= high]

    return filtered


async def get_caregiver_profile(
    session: AsyncSession,
    identity: Optional[AuthIdentity]
) -> CaregiverProfile:
    """Resolve the caller's caregiver profile."""
    if identity is None:
        raise AuthError(GlobalMessages.NOT_AUTHENTICATED)

    async with query_errors(session, "load caregiver profile"):
        result = await session.execute(
            select(CaregiverProfile).where(CaregiverProfile.user_id == identity.id)
        )
        profile = result.scalar_one_or_none()
    if not profile:
        raise ProfileError(GlobalMessages.CAREGIVER_PROFILE_NOT_FOUND)
    return profile


async def update_caregiver_availability(
    session: AsyncSession,
    identity: Optional[AuthIdentity],
    is_available: bool
) -> CaregiverProfile:
    """Set the caller's availability flag."""
    profile = await get_caregiver_profile(session, identity)
    async with query_errors(session, "update availability"):
        profile.is_available = is_available
        await session.commit()

    logger.info(f"Caregiver {profile.id} availability set to {is_available}")
    return profile
