# src/modules/catalog/catalog_controller.py
"""Catalog controller with API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.common.database.database import get_db_session

from . import catalog_service as service
from .schemas import (
    ServiceResponse, ServiceListResponse,
    CertificationResponse, CertificationListResponse
)

router = APIRouter(prefix="/services", tags=["Services"])


@router.get("", response_model=ServiceListResponse)
async def list_services(db: AsyncSession = Depends(get_db_session)):
    """Get the care service catalog, ordered by name."""
    services = await service.get_services(db)
    return ServiceListResponse(
        services=[ServiceResponse.model_validate(s) for s in services],
        total=len(services)
    )


@router.get("/certifications", response_model=CertificationListResponse)
async def list_certifications(db: AsyncSession = Depends(get_db_session)):
    """Get the certifications a caregiver can declare during onboarding."""
    certifications = await service.get_certifications(db)
    return CertificationListResponse(
        certifications=[CertificationResponse.model_validate(c) for c in certifications],
        total=len(certifications)
    )
