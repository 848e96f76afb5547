"""AdsPlan schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from availability_engine.core.types import MaterialCategory, MaterialType, VehicleType


class PlanBase(BaseModel):
    """Base plan schema."""

    name: str = Field(..., min_length=1, max_length=255)
    material_type: MaterialType
    vehicle_type: VehicleType
    category: MaterialCategory
    duration_days: int = Field(..., ge=1, le=3650)
    number_of_devices: int = Field(1, ge=1, le=10)
    price: Optional[float] = Field(None, ge=0.0)


class PlanCreate(PlanBase):
    """Schema for creating a plan."""

    pass


class PlanResponse(PlanBase):
    """Schema for plan response."""

    id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
