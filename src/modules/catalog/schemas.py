# src/modules/catalog/schemas.py
"""Catalog module Pydantic schemas."""

from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel


class ServiceResponse(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    base_price: float

    class Config:
        from_attributes = True


class ServiceListResponse(BaseModel):
    services: List[ServiceResponse]
    total: int


class CertificationResponse(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None

    class Config:
        from_attributes = True


class CertificationListResponse(BaseModel):
    certifications: List[CertificationResponse]
    total: int
