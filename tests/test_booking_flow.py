from datetime import date, time
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.common.exceptions import ValidationError
from src.models.models import CaregiverStatus, Service
from src.modules.bookings import bookings_service
from src.modules.bookings.booking_wizard import TIME_SLOTS, BookingWizard, parse_time_slot
from src.modules.caregivers.schemas import CaregiverResponse, CaregiverServiceInfo, CaregiverUserInfo
from tests.helpers import book_payload, onboard, signup

PERSONAL_CARE = Service(id=uuid4(), name="Personal Care", base_price=30)
COMPANIONSHIP = Service(id=uuid4(), name="Companionship", base_price=25)


def _caregiver_offering(*services) -> CaregiverResponse:
    return CaregiverResponse(
        id=uuid4(),
        user_id=uuid4(),
        user=CaregiverUserInfo(first_name="Sarah", last_name="Johnson"),
        status=CaregiverStatus.APPROVED,
        services=[CaregiverServiceInfo(service_id=s.id, name=s.name) for s in services],
    )


def test_time_slots_cover_working_day():
    assert TIME_SLOTS[0] == "8:00 AM"
    assert TIME_SLOTS[-1] == "7:00 PM"
    assert parse_time_slot("2:00 PM") == time(14, 0)


def test_unknown_time_slot():
    with pytest.raises(ValidationError):
        parse_time_slot("7:30 AM")


def test_steps_are_gated_on_required_fields():
    wizard = BookingWizard([PERSONAL_CARE, COMPANIONSHIP])

    with pytest.raises(ValidationError, match="Select at least one service"):
        wizard.next_step()

    wizard.toggle_service(PERSONAL_CARE.id)
    wizard.next_step()
    assert wizard.step == 2

    with pytest.raises(ValidationError, match="Choose a date and time slot"):
        wizard.next_step()

    wizard.schedule(date.today(), "9:00 AM", 2)
    wizard.next_step()
    assert wizard.step == 2.5

    with pytest.raises(ValidationError, match="Choose a caregiver"):
        wizard.next_step()

    wizard.select_caregiver(_caregiver_offering(PERSONAL_CARE))
    wizard.next_step()
    assert wizard.step == 3

    with pytest.raises(ValidationError, match="Service address is required"):
        wizard.next_step()

    wizard.previous_step()
    assert wizard.step == 2.5


def test_toggle_service_twice_deselects():
    wizard = BookingWizard([PERSONAL_CARE])
    wizard.toggle_service(PERSONAL_CARE.id)
    wizard.toggle_service(PERSONAL_CARE.id)

    assert wizard.selected_service_ids == []


def test_total_is_sum_of_base_prices_times_duration():
    wizard = BookingWizard([PERSONAL_CARE, COMPANIONSHIP])
    wizard.toggle_service(PERSONAL_CARE.id)
    wizard.toggle_service(COMPANIONSHIP.id)
    wizard.schedule(date.today(), "7:00 PM", 3)

    assert wizard.calculate_total() == 165
    assert wizard.start_time == time(19, 0)
    assert wizard.end_time == time(22, 0)


def test_caregiver_must_offer_a_selected_service():
    wizard = BookingWizard([PERSONAL_CARE, COMPANIONSHIP])
    wizard.toggle_service(PERSONAL_CARE.id)

    with pytest.raises(ValidationError):
        wizard.select_caregiver(_caregiver_offering(COMPANIONSHIP))


async def test_confirm_before_last_step(db_session):
    wizard = BookingWizard([PERSONAL_CARE])

    with pytest.raises(ValidationError, match="not ready"):
        await wizard.confirm(db_session, None)


async def test_client_books_personal_care_end_to_end(client, catalog, monkeypatch):
    spy = AsyncMock(wraps=bookings_service.create_booking)
    monkeypatch.setattr(bookings_service, "create_booking", spy)

    caregiver = await signup(client, "sarah@example.com", role="caregiver", first_name="Sarah", last_name="Johnson")
    await onboard(client, caregiver, [catalog["Personal Care"]["id"]], {catalog["Personal Care"]["id"]: "30"})

    mary = await signup(client, "mary@example.com", role="client", first_name="Mary")

    # Step 1: browse the catalog
    options = (await client.get("/client/book-service")).json()
    personal_care = next(s for s in options["services"] if s["name"] == "Personal Care")
    assert personal_care["base_price"] == 30
    assert options["default_duration"] == 2

    # Step 2.5: caregivers offering the selected service
    caregivers = (await client.get("/caregivers", params={"service_ids": [personal_care["id"]]})).json()
    sarah = caregivers["caregivers"][0]

    response = await client.post(
        "/client/book-service",
        headers=mary["headers"],
        json=book_payload([personal_care["id"]], sarah["id"], duration_hours=2, time_slot="10:00 AM"),
    )

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["redirect_to"] == "/client/dashboard"
    assert body["booking"]["total_amount"] == 60
    assert body["booking"]["duration_hours"] == 2
    assert body["booking"]["start_time"] == "10:00:00"
    assert body["booking"]["end_time"] == "12:00:00"
    assert body["booking"]["status"] == "pending"
    assert body["booking"]["services"][0]["rate"] == 30

    assert spy.await_count == 1
    data = spy.await_args.args[2]
    assert data.total_amount == 60
    assert data.duration_hours == 2
    assert [str(sid) for sid in data.service_ids] == [personal_care["id"]]

    dashboard = (await client.get("/client/dashboard", headers=mary["headers"])).json()
    assert [b["id"] for b in dashboard["active_bookings"]] == [body["booking"]["id"]]


async def test_checkout_reports_first_incomplete_step(client, catalog):
    mary = await signup(client, "mary@example.com", role="client")

    response = await client.post(
        "/client/book-service",
        headers=mary["headers"],
        json=book_payload([catalog["Personal Care"]["id"]], str(uuid4()), time_slot=None),
    )

    assert response.status_code == 422
    assert response.json() == {"detail": "Choose a date and time slot"}


async def test_checkout_rejects_caregiver_without_selected_service(client, catalog):
    caregiver = await signup(client, "david@example.com", role="caregiver")
    result = await onboard(client, caregiver, [catalog["Companionship"]["id"]])
    mary = await signup(client, "mary@example.com", role="client")

    response = await client.post(
        "/client/book-service",
        headers=mary["headers"],
        json=book_payload([catalog["Personal Care"]["id"]], result["caregiver"]["id"]),
    )

    assert response.status_code == 422


async def test_checkout_requires_session(client, catalog):
    response = await client.post(
        "/client/book-service",
        json=book_payload([catalog["Personal Care"]["id"]], str(uuid4())),
    )

    assert response.status_code == 401


async def test_checkout_past_last_step_needs_address(client, catalog):
    caregiver = await signup(client, "sarah@example.com", role="caregiver")
    result = await onboard(client, caregiver, [catalog["Personal Care"]["id"]])
    mary = await signup(client, "mary@example.com", role="client")

    response = await client.post(
        "/client/book-service",
        headers=mary["headers"],
        json=book_payload([catalog["Personal Care"]["id"]], result["caregiver"]["id"], service_address="   "),
    )

    assert response.status_code == 422
    assert response.json() == {"detail": "Service address is required"}
