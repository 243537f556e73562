# src/modules/dashboard/dashboard_controller.py
"""Dashboard controller with API endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.common.database.database import get_db_session
from src.auth.dependencies import get_current_identity, get_current_user
from src.models.models import AuthIdentity, User, UserRole

from . import dashboard_service as service
from .schemas import (
    CaregiverDashboardResponse, ClientDashboardResponse,
    ClientListResponse, ScheduleResponse
)


client_router = APIRouter(prefix="/client", tags=["Client"])

caregiver_router = APIRouter(prefix="/caregiver", tags=["Caregiver"])


def _require_role(user: User, role: UserRole) -> None:
    if user.role != role:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Only {role.value}s can access this page"
        )


@client_router.get("/dashboard", response_model=ClientDashboardResponse)
async def get_client_dashboard(
    current_user: User = Depends(get_current_user),
    identity: AuthIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session)
):
    """
    Client home page:
    - Active (pending or confirmed) bookings
    - A few caregivers to get started with
    """
    _require_role(current_user, UserRole.CLIENT)
    return await service.get_client_dashboard(db, identity, current_user)


@caregiver_router.get("/dashboard", response_model=CaregiverDashboardResponse)
async def get_caregiver_dashboard(
    current_user: User = Depends(get_current_user),
    identity: AuthIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session)
):
    """
    Caregiver home page:
    - Availability toggle state
    - Completed jobs, rating and earnings
    - Upcoming jobs and pending job requests
    """
    _require_role(current_user, UserRole.CAREGIVER)
    return await service.get_caregiver_dashboard(db, identity, current_user)


@caregiver_router.get("/schedule", response_model=ScheduleResponse)
async def get_schedule(
    selected_date: Optional[date] = Query(None, alias="date", description="Defaults to today"),
    current_user: User = Depends(get_current_user),
    identity: AuthIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session)
):
    """Bookings on a given day plus the next few upcoming ones."""
    _require_role(current_user, UserRole.CAREGIVER)
    return await service.get_caregiver_schedule(db, identity, selected_date)


@caregiver_router.get("/clients", response_model=ClientListResponse)
async def get_clients(
    search: Optional[str] = Query(None, description="Match against client name"),
    current_user: User = Depends(get_current_user),
    identity: AuthIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session)
):
    """Everyone this caregiver has worked for, with booking totals."""
    _require_role(current_user, UserRole.CAREGIVER)
    return await service.get_caregiver_clients(db, identity, search)
