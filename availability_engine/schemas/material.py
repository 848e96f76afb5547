"""Material schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from availability_engine.core.types import (
    MaterialCategory,
    MaterialStatus,
    MaterialType,
    VehicleType,
)


class MaterialCreate(BaseModel):
    """Schema for creating a material. The code is generated."""

    material_type: MaterialType
    vehicle_type: VehicleType
    category: MaterialCategory
    total_slots: Optional[int] = Field(None, ge=1, le=10)
    description: Optional[str] = None


class MaterialStatusUpdate(BaseModel):
    """Schema for the administrative status feed."""

    status: MaterialStatus


class MaterialCapacityUpdate(BaseModel):
    """Schema for capacity reconfiguration."""

    total_slots: int = Field(..., ge=1, le=10)


class MaterialResponse(BaseModel):
    """Schema for material response."""

    id: UUID
    material_id: str
    material_type: MaterialType
    vehicle_type: VehicleType
    category: MaterialCategory
    total_slots: int
    status: MaterialStatus
    description: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
