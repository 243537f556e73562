# src/modules/onboarding/onboarding_wizard.py
"""
Caregiver onboarding form, steps 1 to 4.

1. services offered
2. experience and bio
3. certifications (optional)
4. rates, zip code, service radius and availability
"""

from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.common.exceptions import ValidationError
from src.models.models import AuthIdentity, CaregiverProfile
from . import onboarding_service
from .schemas import ExperienceBucket, OnboardingRequest

ONBOARDING_STEPS = (1, 2, 3, 4)


class OnboardingWizard:
    def __init__(self):
        self.step = ONBOARDING_STEPS[0]
        self.service_ids: List[UUID] = []
        self.experience: Optional[ExperienceBucket] = None
        self.bio = ""
        self.certifications: List[str] = []
        self.service_rates: Dict[UUID, str] = {}
        self.zip_code = ""
        self.service_radius = 10
        self.availability: List[str] = []

    def missing_fields(self) -> Optional[str]:
        if self.step == 1 and not self.service_ids:
            return "Select at least one service"
        if self.step == 2 and (self.experience is None or not self.bio.strip()):
            return "Experience and bio are required"
        if self.step == 4 and not self.zip_code.strip():
            return "Zip code is required"
        return None

    def next_step(self) -> None:
        reason = self.missing_fields()
        if reason:
            raise ValidationError(reason)
        index = ONBOARDING_STEPS.index(self.step)
        if index < len(ONBOARDING_STEPS) - 1:
            self.step = ONBOARDING_STEPS[index + 1]

    def previous_step(self) -> None:
        index = ONBOARDING_STEPS.index(self.step)
        if index > 0:
            self.step = ONBOARDING_STEPS[index - 1]

    def load(self, request: OnboardingRequest) -> None:
        """Walk through every step with the submitted answers."""
        self.service_ids = list(dict.fromkeys(request.service_ids))
        self.next_step()

        self.experience = request.experience
        self.bio = request.bio
        self.next_step()

        self.certifications = list(dict.fromkeys(request.certifications))
        self.next_step()

        for slot in request.availability:
            onboarding_service.parse_availability_slot(slot)
        self.service_rates = dict(request.service_rates)
        self.zip_code = request.zip_code.strip()
        self.service_radius = request.service_radius
        self.availability = list(dict.fromkeys(request.availability))

    async def complete(self, session: AsyncSession, identity: AuthIdentity) -> CaregiverProfile:
        if self.step != ONBOARDING_STEPS[-1]:
            raise ValidationError("Onboarding is not finished")
        reason = self.missing_fields()
        if reason:
            raise ValidationError(reason)
        return await onboarding_service.complete_caregiver_onboarding(
            session,
            identity,
            service_ids=self.service_ids,
            experience=self.experience,
            bio=self.bio.strip(),
            certifications=self.certifications,
            service_rates=self.service_rates,
            zip_code=self.zip_code,
            service_radius=self.service_radius,
            availability=self.availability,
        )
