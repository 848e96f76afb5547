"""Availability schemas."""

import re
from datetime import date
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from availability_engine.core.types import AvailabilityStatus

MATERIAL_CODE_PATTERN = r"^N?DGL-\d{4,}$"


class AvailabilitySnapshotResponse(BaseModel):
    """Availability of one material over the queried interval."""

    material_id: str
    total_slots: int
    occupied_slots: int
    available_slots: int
    status: AvailabilityStatus
    can_accept_ad: bool
    next_available_date: Optional[date] = None
    all_slots_free_date: Optional[date] = None

    model_config = {"from_attributes": True}


class PlanAvailabilityResponse(BaseModel):
    """Plan-level verdict."""

    plan_id: UUID
    desired_start_date: date
    desired_end_date: date
    can_create: bool
    material_availabilities: List[AvailabilitySnapshotResponse]
    total_available_slots: int
    available_materials_count: int
    next_available_date: Optional[date] = None


class MaterialsAvailabilityRequest(BaseModel):
    """Batch of material codes to evaluate for today."""

    material_ids: List[str] = Field(..., min_length=1, max_length=500)

    @field_validator("material_ids")
    @classmethod
    def validate_codes(cls, value: List[str]) -> List[str]:
        for code in value:
            if not re.match(MATERIAL_CODE_PATTERN, code):
                raise ValueError(f"Malformed material id: {code}")
        return value


class AvailabilitySummaryResponse(BaseModel):
    """Fleet-wide availability counters."""

    total_materials: int
    total_slots: int
    occupied_slots: int
    available_slots: int
    utilization_rate: float
    available_materials: int
    full_materials: int
    maintenance_materials: int

    model_config = {"from_attributes": True}


class ReservationRequest(BaseModel):
    """Request to reserve a material for a plan."""

    desired_start_date: date
    ad_reference: Optional[str] = Field(None, max_length=255)


class ReservationResponse(BaseModel):
    """Outcome of a reservation."""

    success: bool
    material_id: Optional[str] = None
    assignment_id: Optional[UUID] = None
    failure_reason: Optional[str] = None
    next_available_date: Optional[date] = None
    attempts: int = 0

    model_config = {"from_attributes": True}
