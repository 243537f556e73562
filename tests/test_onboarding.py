from datetime import time
from uuid import uuid4

import pytest
from sqlalchemy import select

from src.common.exceptions import ValidationError
from src.models.models import (
    CaregiverAvailability, CaregiverCertification, CaregiverProfile, CaregiverService, Certification
)
from src.modules.onboarding.onboarding_service import (
    experience_years, lowest_rate, parse_availability_slot, parse_rate
)
from src.modules.onboarding.schemas import ExperienceBucket
from tests.helpers import onboard, signup


@pytest.mark.parametrize("value, expected", [
    ("30", 30.0),
    ("27.50/hr", 27.5),
    ("abc", None),
    ("", None),
    ("0", None),
    (None, None),
])
def test_parse_rate(value, expected):
    assert parse_rate(value) == expected


def test_experience_years_uses_leading_number():
    assert experience_years(ExperienceBucket.UNDER_ONE) == 0
    assert experience_years(ExperienceBucket.THREE_TO_FIVE) == 3
    assert experience_years(ExperienceBucket.OVER_TEN) == 10
    assert experience_years(None) == 0


def test_lowest_rate():
    assert lowest_rate({uuid4(): "32", uuid4(): "28"}) == 28
    # Unparsable entries count as 25
    assert lowest_rate({uuid4(): "40", uuid4(): "ask me"}) == 25
    assert lowest_rate({}) == 25


def test_availability_slots():
    assert parse_availability_slot("weekday-morning") == (1, time(6), time(12))
    assert parse_availability_slot("saturday-afternoon") == (6, time(12), time(18))
    assert parse_availability_slot("sunday-evening") == (0, time(18), time(22))

    with pytest.raises(ValidationError):
        parse_availability_slot("holiday-morning")


async def test_onboarding_options(client, catalog):
    caregiver = await signup(client, "sarah@example.com", role="caregiver")

    response = await client.get("/caregiver/onboarding", headers=caregiver["headers"])

    assert response.status_code == 200
    body = response.json()
    assert len(body["services"]) == 5
    assert body["experience_buckets"] == ["0-1", "1-3", "3-5", "5-10", "10+"]
    assert "sunday-morning" in body["availability_options"]
    assert body["default_service_radius"] == 10


async def test_only_caregivers_can_onboard(client, catalog):
    mary = await signup(client, "mary@example.com", role="client")

    response = await client.get("/caregiver/onboarding", headers=mary["headers"])
    assert response.status_code == 403

    response = await client.post("/caregiver/onboarding", headers=mary["headers"], json={})
    assert response.status_code == 403


async def test_complete_onboarding(client, catalog, db_session):
    personal_care = catalog["Personal Care"]["id"]
    companionship = catalog["Companionship"]["id"]
    caregiver = await signup(client, "sarah@example.com", role="caregiver", first_name="Sarah")

    body = await onboard(
        client,
        caregiver,
        [personal_care, companionship, str(uuid4())],
        service_rates={personal_care: "35"},
        experience="5-10",
        bio="Ten years in memory care",
        certifications=["CPR Certification", "Underwater Basket Weaving"],
        availability=["weekday-morning", "saturday-afternoon"],
    )

    assert body["success"] is True
    assert body["redirect_to"] == "/caregiver/dashboard"
    assert body["caregiver"]["experience_years"] == 5
    assert body["caregiver"]["hourly_rate"] == 35
    assert body["caregiver"]["zip_code"] == "62701"
    assert body["caregiver"]["service_radius"] == 15
    assert body["caregiver"]["bio"] == "Ten years in memory care"

    profile = (await db_session.execute(select(CaregiverProfile))).scalar_one()

    services = (await db_session.execute(
        select(CaregiverService).where(CaregiverService.caregiver_id == profile.id)
    )).scalars().all()
    rates = {str(s.service_id): s.custom_rate for s in services}
    # Entered rate, else the catalog base price; the unknown id is skipped
    assert rates == {personal_care: 35, companionship: 25}

    certifications = (await db_session.execute(
        select(Certification.name, CaregiverCertification.verified)
        .select_from(CaregiverCertification)
        .join(Certification, CaregiverCertification.certification_id == Certification.id)
    )).all()
    assert certifications == [("CPR Certification", False)]

    slots = (await db_session.execute(
        select(CaregiverAvailability.day_of_week, CaregiverAvailability.start_time, CaregiverAvailability.end_time)
        .order_by(CaregiverAvailability.day_of_week)
    )).all()
    assert slots == [(1, time(6), time(12)), (6, time(12), time(18))]


async def test_onboarding_without_rates_defaults_to_25(client, catalog):
    caregiver = await signup(client, "david@example.com", role="caregiver")

    body = await onboard(client, caregiver, [catalog["Running Errands"]["id"]])

    assert body["caregiver"]["hourly_rate"] == 25
    assert body["caregiver"]["services"][0]["custom_rate"] == catalog["Running Errands"]["base_price"]


@pytest.mark.parametrize("overrides, detail", [
    ({"service_ids": []}, "Select at least one service"),
    ({"experience": None}, "Experience and bio are required"),
    ({"bio": "   "}, "Experience and bio are required"),
    ({"zip_code": ""}, "Zip code is required"),
    ({"availability": ["monday-night"]}, "Unknown availability slot: monday-night"),
])
async def test_onboarding_steps_are_gated(client, catalog, overrides, detail):
    caregiver = await signup(client, "sarah@example.com", role="caregiver")
    payload = {
        "service_ids": [catalog["Personal Care"]["id"]],
        "experience": "1-3",
        "bio": "Friendly and punctual",
        "zip_code": "62701",
    }
    payload.update(overrides)

    response = await client.post("/caregiver/onboarding", headers=caregiver["headers"], json=payload)

    assert response.status_code == 422
    assert response.json() == {"detail": detail}


async def test_onboarding_twice_does_not_duplicate_services(client, catalog, db_session):
    caregiver = await signup(client, "sarah@example.com", role="caregiver")
    service_ids = [catalog["Personal Care"]["id"]]

    await onboard(client, caregiver, service_ids)
    await onboard(client, caregiver, service_ids)

    services = (await db_session.execute(select(CaregiverService))).scalars().all()
    assert len(services) == 1


async def test_specialties_are_accepted_but_not_stored(client, catalog):
    caregiver = await signup(client, "sarah@example.com", role="caregiver")

    response = await client.post("/caregiver/onboarding", headers=caregiver["headers"], json={
        "service_ids": [catalog["Personal Care"]["id"]],
        "experience": "1-3",
        "bio": "Friendly and punctual",
        "specialties": "Dementia care",
        "zip_code": "62701",
    })

    assert response.status_code == 200
    assert response.json()["caregiver"]["bio"] == "Friendly and punctual"
    assert "specialties" not in response.json()["caregiver"]
