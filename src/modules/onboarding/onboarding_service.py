# src/modules/onboarding/onboarding_service.py

import logging
import re
from datetime import time
from typing import Dict, Iterable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.common.database.database import query_errors
from src.common.exceptions import ValidationError
from src.models.models import (
    AuthIdentity, CaregiverAvailability, CaregiverCertification,
    CaregiverProfile, CaregiverService, Certification, Service
)
from src.modules.caregivers.caregivers_service import get_caregiver_profile
from .schemas import ExperienceBucket

logger = logging.getLogger(__name__)

DEFAULT_RATE = 25.0

AVAILABILITY_DAYS = {
    "weekday": 1,  # Monday
    "saturday": 6,
    "sunday": 0,
}

AVAILABILITY_PERIODS = {
    "morning": (time(6, 0), time(12, 0)),
    "afternoon": (time(12, 0), time(18, 0)),
    "evening": (time(18, 0), time(22, 0)),
}

AVAILABILITY_OPTIONS = [f"{day}-{period}" for day in AVAILABILITY_DAYS for period in AVAILABILITY_PERIODS]

_LEADING_NUMBER = re.compile(r"\s*(\d+(?:\.\d*)?|\.\d+)")


def parse_rate(value: Optional[str]) -> Optional[float]:
    """
    Read the leading number of a typed rate ("30", "27.50/hr").

    Returns None for blank, unparsable or zero rates.
    """
    if value is None:
        return None
    match = _LEADING_NUMBER.match(str(value))
    if not match:
        return None
    rate = float(match.group(1))
    return rate or None


def experience_years(bucket: Optional[ExperienceBucket]) -> int:
    """Leading number of the bucket: "3-5" -> 3, "10+" -> 10."""
    if bucket is None:
        return 0
    match = re.match(r"\d+", bucket.value)
    return int(match.group()) if match else 0


def lowest_rate(service_rates: Dict[UUID, str]) -> float:
    """Lowest entered rate; unparsable entries count as the default rate."""
    rates = [parse_rate(value) or DEFAULT_RATE for value in service_rates.values()]
    return min(rates) if rates else DEFAULT_RATE


def parse_availability_slot(slot: str) -> Tuple[int, time, time]:
    """'saturday-morning' -> (6, 06:00, 12:00)"""
    day, _, period = slot.partition("-")
    if day not in AVAILABILITY_DAYS or period not in AVAILABILITY_PERIODS:
        raise ValidationError(f"Unknown availability slot: {slot}")
    start, end = AVAILABILITY_PERIODS[period]
    return AVAILABILITY_DAYS[day], start, end


async def _add_services(
    session: AsyncSession,
    profile_id: UUID,
    service_ids: Iterable[UUID],
    service_rates: Dict[UUID, str]
) -> int:
    async with query_errors(session, "load services"):
        catalog = {s.id: s for s in (await session.execute(select(Service))).scalars().all()}
        existing = set((await session.execute(
            select(CaregiverService.service_id).where(CaregiverService.caregiver_id == profile_id)
        )).scalars().all())

    rows = []
    for service_id in service_ids:
        service = catalog.get(service_id)
        if service is None or service_id in existing:
            continue
        custom_rate = parse_rate(service_rates.get(service_id)) or service.base_price or DEFAULT_RATE
        rows.append(CaregiverService(caregiver_id=profile_id, service_id=service_id, custom_rate=custom_rate))

    if rows:
        async with query_errors(session, "add caregiver services"):
            session.add_all(rows)
            await session.commit()
    return len(rows)


async def _add_certifications(session: AsyncSession, profile_id: UUID, names: Iterable[str]) -> int:
    async with query_errors(session, "load certifications"):
        catalog = {c.name: c.id for c in (await session.execute(select(Certification))).scalars().all()}
        existing = set((await session.execute(
            select(CaregiverCertification.certification_id)
            .where(CaregiverCertification.caregiver_id == profile_id)
        )).scalars().all())

    rows = [
        CaregiverCertification(caregiver_id=profile_id, certification_id=catalog[name], verified=False)
        for name in names
        if name in catalog and catalog[name] not in existing
    ]

    if rows:
        async with query_errors(session, "add caregiver certifications"):
            session.add_all(rows)
            await session.commit()
    return len(rows)


async def _add_availability(session: AsyncSession, profile_id: UUID, slots: Iterable[str]) -> int:
    rows = []
    for slot in slots:
        day_of_week, start, end = parse_availability_slot(slot)
        rows.append(CaregiverAvailability(
            caregiver_id=profile_id,
            day_of_week=day_of_week,
            start_time=start,
            end_time=end,
        ))

    if rows:
        async with query_errors(session, "add caregiver availability"):
            session.add_all(rows)
            await session.commit()
    return len(rows)


async def complete_caregiver_onboarding(
    session: AsyncSession,
    identity: Optional[AuthIdentity],
    service_ids: List[UUID],
    experience: Optional[ExperienceBucket],
    bio: str,
    certifications: List[str],
    service_rates: Dict[UUID, str],
    zip_code: str,
    service_radius: int,
    availability: List[str],
) -> CaregiverProfile:
    """
    Persist a finished onboarding form.

    Runs in four stages, each committed on its own: the profile update, the
    offered services, the certifications and the availability slots. A
    failure in a later stage keeps whatever the earlier stages wrote.
    """
    profile = await get_caregiver_profile(session, identity)
    profile_id = profile.id

    async with query_errors(session, "update caregiver profile"):
        profile.bio = bio
        profile.experience_years = experience_years(experience)
        profile.zip_code = zip_code
        profile.service_radius = service_radius
        profile.hourly_rate = lowest_rate(service_rates)
        await session.commit()

    services_added = await _add_services(session, profile_id, service_ids, service_rates)
    certifications_added = await _add_certifications(session, profile_id, certifications)
    slots_added = await _add_availability(session, profile_id, availability)

    logger.info(
        f"Caregiver {profile_id} onboarded: {services_added} services, "
        f"{certifications_added} certifications, {slots_added} availability slots"
    )
    return profile
