# src/modules/catalog/catalog_service.py
"""Reference data: the service catalog and the certification catalog."""

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.common.database.database import query_errors
from src.models.models import Service, Certification


async def get_services(session: AsyncSession) -> List[Service]:
    """Return the service catalog ordered by name."""
    async with query_errors(session, "load services"):
        result = await session.execute(select(Service).order_by(Service.name))
        return list(result.scalars().all())


async def get_certifications(session: AsyncSession) -> List[Certification]:
    """Return the certification catalog ordered by name."""
    async with query_errors(session, "load certifications"):
        result = await session.execute(select(Certification).order_by(Certification.name))
        return list(result.scalars().all())
