from uuid import uuid4

from src.models.models import CaregiverStatus
from src.modules.caregivers.caregivers_service import filter_caregivers
from src.modules.caregivers.schemas import (
    CaregiverResponse, CaregiverSearchParams, CaregiverServiceInfo, CaregiverUserInfo, ExperienceLevel
)
from tests.helpers import onboard, signup

PERSONAL_CARE = uuid4()
COMPANIONSHIP = uuid4()


def _caregiver(first_name, last_name, bio=None, rate=None, rating=0.0, years=None, services=()):
    return CaregiverResponse(
        id=uuid4(),
        user_id=uuid4(),
        user=CaregiverUserInfo(first_name=first_name, last_name=last_name),
        bio=bio,
        hourly_rate=rate,
        rating=rating,
        experience_years=years,
        status=CaregiverStatus.APPROVED,
        services=[CaregiverServiceInfo(service_id=s, name="") for s in services],
    )


CAREGIVERS = [
    _caregiver("Sarah", "Johnson", bio="Memory care specialist", rate=32, rating=4.9, years=8,
               services=[PERSONAL_CARE]),
    _caregiver("David", "Okafor", bio="Errands and meals", rate=22, rating=4.1, years=2,
               services=[COMPANIONSHIP]),
    _caregiver("Linda", "Martinez", rate=None, rating=0.0, years=None),
    _caregiver("Paul", "Reyes", bio="Retired nurse", rate=140, rating=4.6, years=4,
               services=[PERSONAL_CARE, COMPANIONSHIP]),
]


def _names(caregivers):
    return [c.user.first_name for c in caregivers]


def test_default_filters_apply_price_range():
    # Paul is above the default $100 ceiling
    assert _names(filter_caregivers(CAREGIVERS, CaregiverSearchParams())) == ["Sarah", "David", "Linda"]


def test_search_matches_name_and_bio_case_insensitively():
    assert _names(filter_caregivers(CAREGIVERS, CaregiverSearchParams(search="okafor"))) == ["David"]
    assert _names(filter_caregivers(CAREGIVERS, CaregiverSearchParams(search="MEMORY"))) == ["Sarah"]


def test_service_filter_is_any_of():
    params = CaregiverSearchParams(service_ids=[PERSONAL_CARE, COMPANIONSHIP], max_price=200)
    assert _names(filter_caregivers(CAREGIVERS, params)) == ["Sarah", "David", "Paul"]


def test_missing_rate_counts_as_zero():
    params = CaregiverSearchParams(min_price=1)
    assert "Linda" not in _names(filter_caregivers(CAREGIVERS, params))


def test_min_rating():
    params = CaregiverSearchParams(min_rating=4.5, max_price=200)
    assert _names(filter_caregivers(CAREGIVERS, params)) == ["Sarah", "Paul"]


def test_experience_levels():
    junior = CaregiverSearchParams(experience_level=ExperienceLevel.JUNIOR, max_price=200)
    mid = CaregiverSearchParams(experience_level=ExperienceLevel.MID, max_price=200)
    senior = CaregiverSearchParams(experience_level=ExperienceLevel.SENIOR, max_price=200)

    # Missing experience counts as 0 years
    assert _names(filter_caregivers(CAREGIVERS, junior)) == ["David", "Linda"]
    assert _names(filter_caregivers(CAREGIVERS, mid)) == ["Paul"]
    assert _names(filter_caregivers(CAREGIVERS, senior)) == ["Sarah"]


async def test_list_caregivers_filters_by_any_selected_service(client, catalog):
    personal_care = catalog["Personal Care"]["id"]
    companionship = catalog["Companionship"]["id"]
    errands = catalog["Running Errands"]["id"]

    sarah = await signup(client, "sarah@example.com", role="caregiver", first_name="Sarah")
    david = await signup(client, "david@example.com", role="caregiver", first_name="David")
    await onboard(client, sarah, [personal_care])
    await onboard(client, david, [companionship])

    response = await client.get("/caregivers", params={"service_ids": [personal_care, companionship]})
    assert response.status_code == 200
    assert {c["user"]["first_name"] for c in response.json()["caregivers"]} == {"Sarah", "David"}

    response = await client.get("/caregivers", params={"service_ids": [errands]})
    assert response.json()["total"] == 0

    # No filter returns everyone, including caregivers who haven't onboarded
    await signup(client, "new@example.com", role="caregiver", first_name="Newbie")
    response = await client.get("/caregivers")
    assert response.json()["total"] == 3


async def test_get_caregiver_by_id(client, catalog):
    caregiver = await signup(client, "sarah@example.com", role="caregiver", first_name="Sarah")
    result = await onboard(client, caregiver, [catalog["Personal Care"]["id"]], {catalog["Personal Care"]["id"]: "35"})
    caregiver_id = result["caregiver"]["id"]

    response = await client.get(f"/caregivers/{caregiver_id}")

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["first_name"] == "Sarah"
    assert body["services"] == [
        {"service_id": catalog["Personal Care"]["id"], "name": "Personal Care", "custom_rate": 35.0}
    ]


async def test_get_unknown_caregiver(client):
    response = await client.get(f"/caregivers/{uuid4()}")

    assert response.status_code == 404
    assert response.json() == {"detail": "Caregiver not found"}


async def test_toggle_availability(client):
    caregiver = await signup(client, "toggle@example.com", role="caregiver")

    response = await client.put("/caregivers/me/availability", headers=caregiver["headers"], json={"is_available": False})

    assert response.status_code == 200
    assert response.json() == {"success": True, "is_available": False}

    me = await client.get("/caregivers")
    assert me.json()["caregivers"][0]["is_available"] is False


async def test_toggle_availability_requires_session(client):
    response = await client.put("/caregivers/me/availability", json={"is_available": False})

    assert response.status_code == 401


async def test_toggle_availability_as_client(client):
    user = await signup(client, "client@example.com", role="client")

    response = await client.put("/caregivers/me/availability", headers=user["headers"], json={"is_available": False})

    assert response.status_code == 404
    assert response.json() == {"detail": "Caregiver profile not found"}


async def test_client_caregiver_search(client, catalog):
    sarah = await signup(client, "sarah@example.com", role="caregiver", first_name="Sarah", last_name="Johnson")
    david = await signup(client, "david@example.com", role="caregiver", first_name="David", last_name="Okafor")
    await onboard(client, sarah, [catalog["Personal Care"]["id"]], {catalog["Personal Care"]["id"]: "30"},
                  experience="5-10")
    await onboard(client, david, [catalog["Companionship"]["id"]], {catalog["Companionship"]["id"]: "20"},
                  experience="0-1")

    response = await client.get("/client/caregivers", params={"search": "johnson"})
    assert [c["user"]["first_name"] for c in response.json()["caregivers"]] == ["Sarah"]

    response = await client.get("/client/caregivers", params={"max_price": 25})
    assert [c["user"]["first_name"] for c in response.json()["caregivers"]] == ["David"]

    response = await client.get("/client/caregivers", params={"experience_level": "5+"})
    assert [c["user"]["first_name"] for c in response.json()["caregivers"]] == ["Sarah"]
