# src/modules/onboarding/schemas.py

from enum import Enum
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.modules.caregivers.schemas import CaregiverResponse
from src.modules.catalog.schemas import CertificationResponse, ServiceResponse


class ExperienceBucket(str, Enum):
    """Experience choices offered to caregivers, in years."""
    UNDER_ONE = "0-1"
    ONE_TO_THREE = "1-3"
    THREE_TO_FIVE = "3-5"
    FIVE_TO_TEN = "5-10"
    OVER_TEN = "10+"


class OnboardingRequest(BaseModel):
    """All four onboarding steps in one payload."""
    # Step 1: services offered
    service_ids: List[UUID] = []
    # Step 2: experience
    experience: Optional[ExperienceBucket] = None
    bio: str = ""
    specialties: Optional[str] = Field(None, description="Shown on the form only, not stored")
    # Step 3: certifications, by catalog name
    certifications: List[str] = []
    # Step 4: rates, location and availability
    service_rates: Dict[UUID, str] = Field(
        default_factory=dict,
        description="Hourly rate per service id, as typed into the form"
    )
    zip_code: str = ""
    service_radius: int = Field(default=10, ge=1)
    availability: List[str] = Field(
        default_factory=list,
        description='Slots such as "weekday-morning" or "sunday-evening"'
    )


class OnboardingOptionsResponse(BaseModel):
    services: List[ServiceResponse]
    certifications: List[CertificationResponse]
    experience_buckets: List[str]
    availability_options: List[str]
    default_service_radius: int


class OnboardingCompleteResponse(BaseModel):
    success: bool
    message: str
    redirect_to: str = "/caregiver/dashboard"
    caregiver: Optional[CaregiverResponse] = None
