from datetime import date, timedelta
from typing import Dict, List, Optional

from httpx import AsyncClient

PASSWORD = "secret123"


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def signup(
    client: AsyncClient,
    email: str,
    role: str = "client",
    first_name: str = "Test",
    last_name: str = "User",
) -> dict:
    response = await client.post("/auth/signup", json={
        "email": email,
        "password": PASSWORD,
        "first_name": first_name,
        "last_name": last_name,
        "phone": "555-0100",
        "role": role,
    })
    assert response.status_code == 201, response.text
    body = response.json()
    body["headers"] = auth_headers(body["session"]["access_token"])
    return body


async def onboard(
    client: AsyncClient,
    caregiver: dict,
    service_ids: List[str],
    service_rates: Optional[Dict[str, str]] = None,
    experience: str = "3-5",
    bio: str = "Experienced and patient caregiver",
    certifications: Optional[List[str]] = None,
    availability: Optional[List[str]] = None,
) -> dict:
    response = await client.post("/caregiver/onboarding", headers=caregiver["headers"], json={
        "service_ids": service_ids,
        "experience": experience,
        "bio": bio,
        "certifications": certifications or [],
        "service_rates": service_rates or {},
        "zip_code": "62701",
        "service_radius": 15,
        "availability": availability or ["weekday-morning"],
    })
    assert response.status_code == 200, response.text
    return response.json()


def book_payload(service_ids: List[str], caregiver_id: str, **overrides) -> dict:
    payload = {
        "service_ids": service_ids,
        "service_date": (date.today() + timedelta(days=3)).isoformat(),
        "time_slot": "9:00 AM",
        "duration_hours": 2,
        "caregiver_id": caregiver_id,
        "service_address": "14 Orchard Lane, Springfield",
        "special_instructions": "Ring the side door",
    }
    payload.update(overrides)
    return payload
