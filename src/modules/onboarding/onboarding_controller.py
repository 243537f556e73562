# src/modules/onboarding/onboarding_controller.py

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.dependencies import get_current_identity, get_current_user
from src.common.database.database import get_db_session
from src.common.utils.global_messages import GlobalMessages
from src.models.models import AuthIdentity, User, UserRole
from src.modules.caregivers.caregivers_service import get_caregiver_by_id
from src.modules.catalog import catalog_service
from src.modules.catalog.schemas import CertificationResponse, ServiceResponse
from src.modules.onboarding.onboarding_service import AVAILABILITY_OPTIONS
from src.modules.onboarding.onboarding_wizard import OnboardingWizard
from src.modules.onboarding.schemas import (
    ExperienceBucket,
    OnboardingCompleteResponse,
    OnboardingOptionsResponse,
    OnboardingRequest,
)

router = APIRouter(prefix="/caregiver/onboarding", tags=["Onboarding"])


def _require_caregiver(current_user: User) -> None:
    if current_user.role != UserRole.CAREGIVER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only caregivers can access onboarding"
        )


@router.get("", response_model=OnboardingOptionsResponse)
async def get_onboarding_options(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """
    Choices shown by the onboarding form: services, certifications,
    experience buckets and availability slots.
    """
    _require_caregiver(current_user)

    services = await catalog_service.get_services(db)
    certifications = await catalog_service.get_certifications(db)
    return OnboardingOptionsResponse(
        services=[ServiceResponse.model_validate(s) for s in services],
        certifications=[CertificationResponse.model_validate(c) for c in certifications],
        experience_buckets=[bucket.value for bucket in ExperienceBucket],
        availability_options=AVAILABILITY_OPTIONS,
        default_service_radius=10,
    )


@router.post("", response_model=OnboardingCompleteResponse)
async def complete_onboarding(
    request: OnboardingRequest,
    current_user: User = Depends(get_current_user),
    identity: AuthIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session)
):
    """
    Finish caregiver onboarding.

    The steps are checked in order and the first incomplete one is
    reported as a 422.
    """
    _require_caregiver(current_user)

    wizard = OnboardingWizard()
    wizard.load(request)
    profile = await wizard.complete(db, identity)

    return OnboardingCompleteResponse(
        success=True,
        message=GlobalMessages.ONBOARDING_COMPLETED,
        caregiver=await get_caregiver_by_id(db, profile.id),
    )
