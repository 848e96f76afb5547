"""Schemas package."""

from availability_engine.schemas.assignment import AssignmentResponse, AssignmentStatusUpdate
from availability_engine.schemas.availability import (
    AvailabilitySnapshotResponse,
    AvailabilitySummaryResponse,
    MaterialsAvailabilityRequest,
    PlanAvailabilityResponse,
    ReservationRequest,
    ReservationResponse,
)
from availability_engine.schemas.material import (
    MaterialCapacityUpdate,
    MaterialCreate,
    MaterialResponse,
    MaterialStatusUpdate,
)
from availability_engine.schemas.plan import PlanCreate, PlanResponse

__all__ = [
    "AssignmentResponse",
    "AssignmentStatusUpdate",
    "AvailabilitySnapshotResponse",
    "AvailabilitySummaryResponse",
    "MaterialsAvailabilityRequest",
    "PlanAvailabilityResponse",
    "ReservationRequest",
    "ReservationResponse",
    "MaterialCapacityUpdate",
    "MaterialCreate",
    "MaterialResponse",
    "MaterialStatusUpdate",
    "PlanCreate",
    "PlanResponse",
]
