# src/modules/bookings/booking_wizard.py
"""
Book-service checkout.

The client walks through four steps: pick services (1), pick a date, time
slot and duration (2), pick a caregiver offering at least one of the chosen
services (2.5), then give the address and confirm (3). A step can only be
left once its fields are filled in.
"""

from datetime import date, datetime, time, timedelta
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.common.exceptions import AuthError, ValidationError
from src.common.utils.global_messages import GlobalMessages
from src.models.models import AuthIdentity, Booking, Service
from src.modules.caregivers import caregivers_service
from src.modules.caregivers.schemas import CaregiverResponse
from src.modules.catalog import catalog_service
from . import bookings_service
from .schemas import BookingCheckoutRequest, BookingCreateRequest

BOOKING_STEPS = (1, 2, 2.5, 3)

TIME_SLOTS = [
    "8:00 AM", "9:00 AM", "10:00 AM", "11:00 AM",
    "12:00 PM", "1:00 PM", "2:00 PM", "3:00 PM",
    "4:00 PM", "5:00 PM", "6:00 PM", "7:00 PM",
]

DURATION_OPTIONS = [1, 2, 3, 4]
DEFAULT_DURATION = 2


def parse_time_slot(slot: str) -> time:
    """'2:00 PM' -> time(14, 0)"""
    if slot not in TIME_SLOTS:
        raise ValidationError(f"Unknown time slot: {slot}")
    return datetime.strptime(slot, "%I:%M %p").time()


class BookingWizard:
    def __init__(self, services: Sequence[Service]):
        self.services = {service.id: service for service in services}
        self.step = BOOKING_STEPS[0]
        self.selected_service_ids: List[UUID] = []
        self.service_date: Optional[date] = None
        self.time_slot: Optional[str] = None
        self.duration_hours = DEFAULT_DURATION
        self.caregiver: Optional[CaregiverResponse] = None
        self.service_address = ""
        self.special_instructions: Optional[str] = None

    # -- step 1 -------------------------------------------------------------

    def toggle_service(self, service_id: UUID) -> None:
        if service_id not in self.services:
            raise ValidationError(f"Unknown service: {service_id}")
        if service_id in self.selected_service_ids:
            self.selected_service_ids.remove(service_id)
        else:
            self.selected_service_ids.append(service_id)

    # -- step 2 -------------------------------------------------------------

    def schedule(self, service_date: Optional[date], time_slot: Optional[str], duration_hours: int) -> None:
        if time_slot is not None:
            parse_time_slot(time_slot)
        if duration_hours not in DURATION_OPTIONS:
            raise ValidationError(f"Duration must be between 1 and {DURATION_OPTIONS[-1]} hours")
        self.service_date = service_date
        self.time_slot = time_slot
        self.duration_hours = duration_hours

    # -- step 2.5 -----------------------------------------------------------

    def select_caregiver(self, caregiver: CaregiverResponse) -> None:
        if not caregivers_service.offers_any_service(caregiver, self.selected_service_ids):
            raise ValidationError("Caregiver does not offer any of the selected services")
        self.caregiver = caregiver

    # -- step 3 -------------------------------------------------------------

    def set_details(self, service_address: str, special_instructions: Optional[str] = None) -> None:
        self.service_address = service_address.strip()
        self.special_instructions = special_instructions or None

    # -- navigation ---------------------------------------------------------

    def missing_fields(self) -> Optional[str]:
        """Why the current step cannot be left, or None when it can."""
        if self.step == 1 and not self.selected_service_ids:
            return "Select at least one service"
        if self.step == 2 and (self.service_date is None or self.time_slot is None):
            return "Choose a date and time slot"
        if self.step == 2.5 and self.caregiver is None:
            return "Choose a caregiver"
        if self.step == 3 and not self.service_address:
            return "Service address is required"
        return None

    def next_step(self) -> None:
        reason = self.missing_fields()
        if reason:
            raise ValidationError(reason)
        index = BOOKING_STEPS.index(self.step)
        if index < len(BOOKING_STEPS) - 1:
            self.step = BOOKING_STEPS[index + 1]

    def previous_step(self) -> None:
        index = BOOKING_STEPS.index(self.step)
        if index > 0:
            self.step = BOOKING_STEPS[index - 1]

    # -- totals -------------------------------------------------------------

    def calculate_total(self) -> float:
        """Sum of the selected services' base prices times the duration."""
        hourly = sum(float(self.services[sid].base_price) for sid in self.selected_service_ids)
        return hourly * self.duration_hours

    @property
    def start_time(self) -> Optional[time]:
        return parse_time_slot(self.time_slot) if self.time_slot else None

    @property
    def end_time(self) -> Optional[time]:
        start = self.start_time
        if start is None:
            return None
        return (datetime.combine(date.min, start) + timedelta(hours=self.duration_hours)).time()

    def to_booking_request(self) -> BookingCreateRequest:
        return BookingCreateRequest(
            caregiver_id=self.caregiver.id,
            service_date=self.service_date,
            start_time=self.start_time,
            end_time=self.end_time,
            duration_hours=self.duration_hours,
            total_amount=self.calculate_total(),
            service_address=self.service_address,
            special_instructions=self.special_instructions,
            service_ids=list(self.selected_service_ids),
        )

    async def confirm(self, session: AsyncSession, identity: Optional[AuthIdentity]) -> Booking:
        """Submit the booking. Only valid on the last step."""
        if self.step != BOOKING_STEPS[-1]:
            raise ValidationError("Booking is not ready to be confirmed")
        reason = self.missing_fields()
        if reason:
            raise ValidationError(reason)
        return await bookings_service.create_booking(session, identity, self.to_booking_request())


async def run_checkout(
    session: AsyncSession,
    identity: Optional[AuthIdentity],
    request: BookingCheckoutRequest
) -> Booking:
    """Drive the wizard through every step with the submitted answers."""
    if identity is None:
        raise AuthError(GlobalMessages.NOT_AUTHENTICATED)

    wizard = BookingWizard(await catalog_service.get_services(session))

    for service_id in request.service_ids:
        if service_id not in wizard.selected_service_ids:
            wizard.toggle_service(service_id)
    wizard.next_step()

    wizard.schedule(request.service_date, request.time_slot, request.duration_hours)
    wizard.next_step()

    if request.caregiver_id is not None:
        candidates = await caregivers_service.get_available_caregivers(session, wizard.selected_service_ids)
        caregiver = next((c for c in candidates if c.id == request.caregiver_id), None)
        if caregiver is None:
            raise ValidationError("Caregiver does not offer any of the selected services")
        wizard.select_caregiver(caregiver)
    wizard.next_step()

    wizard.set_details(request.service_address, request.special_instructions)
    return await wizard.confirm(session, identity)
