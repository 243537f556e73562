# src/modules/caregivers/caregivers_controller.py
"""Caregivers controller with API routes."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.common.database.database import get_db_session
from src.auth.dependencies import get_optional_identity
from src.models.models import AuthIdentity

from . import caregivers_service as service
from .schemas import (
    CaregiverResponse, CaregiverListResponse, CaregiverSearchParams,
    AvailabilityUpdateRequest, AvailabilityUpdateResponse, ExperienceLevel
)

router = APIRouter(prefix="/caregivers", tags=["Caregivers"])

client_router = APIRouter(prefix="/client", tags=["Client"])


@router.get("", response_model=CaregiverListResponse)
async def list_caregivers(
    service_ids: Optional[List[UUID]] = Query(None, description="Keep caregivers offering any of these services"),
    db: AsyncSession = Depends(get_db_session)
):
    """Get caregivers with their offered services."""
    caregivers = await service.get_available_caregivers(db, service_ids)
    return CaregiverListResponse(caregivers=caregivers, total=len(caregivers))


# Must come before /{caregiver_id}
@router.put("/me/availability", response_model=AvailabilityUpdateResponse)
async def update_availability(
    request: AvailabilityUpdateRequest,
    db: AsyncSession = Depends(get_db_session),
    identity: Optional[AuthIdentity] = Depends(get_optional_identity)
):
    """Toggle whether the signed-in caregiver is taking new work."""
    profile = await service.update_caregiver_availability(db, identity, request.is_available)
    return AvailabilityUpdateResponse(success=True, is_available=profile.is_available)


@router.get("/{caregiver_id}", response_model=CaregiverResponse)
async def get_caregiver(
    caregiver_id: UUID,
    db: AsyncSession = Depends(get_db_session)
):
    """Get a single caregiver profile."""
    caregiver = await service.get_caregiver_by_id(db, caregiver_id)
    if not caregiver:
        raise HTTPException(status_code=404, detail="Caregiver not found")
    return caregiver


@client_router.get("/caregivers", response_model=CaregiverListResponse)
async def find_caregivers(
    search: Optional[str] = Query(None, description="Match against name and bio"),
    service_ids: Optional[List[UUID]] = Query(None),
    min_price: float = Query(0, ge=0),
    max_price: float = Query(100, ge=0),
    min_rating: float = Query(0, ge=0, le=5),
    experience_level: Optional[ExperienceLevel] = Query(None),
    db: AsyncSession = Depends(get_db_session)
):
    """Search caregivers with the client filter panel."""
    params = CaregiverSearchParams(
        search=search,
        service_ids=service_ids or [],
        min_price=min_price,
        max_price=max_price,
        min_rating=min_rating,
        experience_level=experience_level
    )
    caregivers = await service.get_available_caregivers(db)
    filtered = service.filter_caregivers(caregivers, params)
    return CaregiverListResponse(caregivers=filtered, total=len(filtered))
