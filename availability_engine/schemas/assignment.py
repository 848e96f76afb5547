"""Assignment schemas."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from availability_engine.core.types import AssignmentStatus


class AssignmentStatusUpdate(BaseModel):
    """Schema for moving an assignment to another status."""

    status: AssignmentStatus


class AssignmentResponse(BaseModel):
    """Schema for assignment response."""

    id: UUID
    material_id: str
    plan_id: Optional[UUID]
    start_date: date
    end_date: date
    slot_count: int
    status: AssignmentStatus
    ad_reference: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class LifecycleSweepResult(BaseModel):
    """Counters returned by a lifecycle sweep."""

    started: int
    ended: int
