from datetime import date, time, timedelta
from unittest.mock import Mock
from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from src.common.exceptions import AuthError, QueryError
from src.models.models import AuthIdentity, Booking, BookingService
from src.modules.bookings import bookings_service
from src.modules.bookings.schemas import BookingCreateRequest
from tests.helpers import onboard, signup


async def _identity(session, email) -> AuthIdentity:
    result = await session.execute(select(AuthIdentity).where(AuthIdentity.email == email))
    return result.scalar_one()


def _request(caregiver_id, service_ids, days_ahead=3, total=60.0, duration=2) -> dict:
    return {
        "caregiver_id": caregiver_id,
        "service_date": (date.today() + timedelta(days=days_ahead)).isoformat(),
        "start_time": "09:00:00",
        "end_time": "11:00:00",
        "duration_hours": duration,
        "total_amount": total,
        "service_address": "14 Orchard Lane",
        "service_ids": service_ids,
    }


@pytest_asyncio.fixture
async def parties(client, catalog):
    """A client and an onboarded caregiver offering personal care and companionship."""
    mary = await signup(client, "mary@example.com", role="client", first_name="Mary", last_name="Hill")
    sarah = await signup(client, "sarah@example.com", role="caregiver", first_name="Sarah", last_name="Johnson")
    result = await onboard(client, sarah, [catalog["Personal Care"]["id"], catalog["Companionship"]["id"]])
    return mary, sarah, result["caregiver"]["id"]


async def test_create_booking_requires_session(db_session):
    data = BookingCreateRequest(
        caregiver_id=uuid4(),
        service_date=date.today(),
        start_time=time(9),
        end_time=time(11),
        duration_hours=2,
        total_amount=60,
        service_address="Somewhere",
        service_ids=[uuid4()],
    )

    with pytest.raises(AuthError, match="Not authenticated"):
        await bookings_service.create_booking(db_session, None, data)


async def test_create_booking_over_http_requires_session(client, parties, catalog):
    _, _, caregiver_id = parties

    response = await client.post("/bookings", json=_request(caregiver_id, [catalog["Personal Care"]["id"]]))

    assert response.status_code == 401
    assert response.json() == {"detail": "Not authenticated"}


async def test_line_rate_is_even_split(client, parties, catalog):
    mary, _, caregiver_id = parties
    service_ids = [catalog["Personal Care"]["id"], catalog["Companionship"]["id"]]

    response = await client.post(
        "/bookings", headers=mary["headers"], json=_request(caregiver_id, service_ids, total=110.0, duration=2)
    )

    assert response.status_code == 201
    booking = response.json()
    assert booking["status"] == "pending"
    assert booking["total_amount"] == 110.0
    # 110 / 2 hours / 2 services, regardless of each service's own price
    assert sorted(line["rate"] for line in booking["services"]) == [27.5, 27.5]
    assert {line["name"] for line in booking["services"]} == {"Personal Care", "Companionship"}
    assert booking["caregiver"]["first_name"] == "Sarah"
    assert booking["client"]["first_name"] == "Mary"


async def test_failed_lines_leave_booking_behind(client, parties, catalog, db_session, monkeypatch):
    _, _, caregiver_id = parties
    identity = await _identity(db_session, "mary@example.com")
    data = BookingCreateRequest(**_request(caregiver_id, [catalog["Personal Care"]["id"]]))
    monkeypatch.setattr(bookings_service, "BookingService", Mock(side_effect=SQLAlchemyError("boom")))

    with pytest.raises(QueryError, match="Failed to add booking services"):
        await bookings_service.create_booking(db_session, identity, data)

    assert (await db_session.execute(select(func.count()).select_from(Booking))).scalar() == 1
    assert (await db_session.execute(select(func.count()).select_from(BookingService))).scalar() == 0


async def test_client_bookings_ordered_by_service_date(client, parties, catalog):
    mary, _, caregiver_id = parties
    service_ids = [catalog["Personal Care"]["id"]]
    for days_ahead in (5, 1, 3):
        await client.post("/bookings", headers=mary["headers"], json=_request(caregiver_id, service_ids, days_ahead))

    response = await client.get("/bookings/client", headers=mary["headers"])

    assert response.status_code == 200
    dates = [b["service_date"] for b in response.json()["bookings"]]
    assert dates == sorted(dates)
    assert len(dates) == 3


async def test_caregiver_bookings_and_job_requests(client, parties, catalog):
    mary, sarah, caregiver_id = parties
    service_ids = [catalog["Personal Care"]["id"]]
    first = (await client.post("/bookings", headers=mary["headers"], json=_request(caregiver_id, service_ids, 4))).json()
    second = (await client.post("/bookings", headers=mary["headers"], json=_request(caregiver_id, service_ids, 2))).json()

    bookings = (await client.get("/bookings/caregiver", headers=sarah["headers"])).json()["bookings"]
    assert [b["id"] for b in bookings] == [second["id"], first["id"]]

    # Newest request first
    requests = (await client.get("/bookings/requests", headers=sarah["headers"])).json()["bookings"]
    assert [b["id"] for b in requests] == [second["id"], first["id"]]


async def test_accept_and_decline(client, parties, catalog):
    mary, sarah, caregiver_id = parties
    service_ids = [catalog["Personal Care"]["id"]]
    first = (await client.post("/bookings", headers=mary["headers"], json=_request(caregiver_id, service_ids))).json()
    second = (await client.post("/bookings", headers=mary["headers"], json=_request(caregiver_id, service_ids))).json()

    accepted = await client.post(f"/bookings/{first['id']}/accept", headers=sarah["headers"])
    declined = await client.post(f"/bookings/{second['id']}/decline", headers=sarah["headers"])

    assert accepted.status_code == 200
    assert accepted.json()["booking"]["status"] == "confirmed"
    assert declined.json()["booking"]["status"] == "cancelled"

    requests = (await client.get("/bookings/requests", headers=sarah["headers"])).json()
    assert requests["total"] == 0


async def test_status_update_has_no_transition_rules(client, parties, catalog):
    mary, sarah, caregiver_id = parties
    booking = (await client.post(
        "/bookings", headers=mary["headers"], json=_request(caregiver_id, [catalog["Personal Care"]["id"]])
    )).json()

    for status in ("completed", "pending", "in_progress"):
        response = await client.put(
            f"/bookings/{booking['id']}/status", headers=sarah["headers"], json={"status": status}
        )
        assert response.status_code == 200
        assert response.json()["booking"]["status"] == status


async def test_status_update_unknown_booking(client, parties):
    _, sarah, _ = parties

    response = await client.put(f"/bookings/{uuid4()}/status", headers=sarah["headers"], json={"status": "confirmed"})

    assert response.status_code == 404
    assert response.json() == {"detail": "Booking not found"}


async def test_caregiver_routes_reject_clients(client, parties):
    mary, _, _ = parties

    response = await client.get("/bookings/requests", headers=mary["headers"])

    assert response.status_code == 404
    assert response.json() == {"detail": "Caregiver profile not found"}
