"""
Core data types for the availability engine.
"""
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import List, Optional
from uuid import UUID


class MaterialType(str, Enum):
    POSTER = "POSTER"
    LCD = "LCD"
    STICKER = "STICKER"
    HEADDRESS = "HEADDRESS"
    BANNER = "BANNER"


class VehicleType(str, Enum):
    CAR = "CAR"
    MOTORCYCLE = "MOTORCYCLE"
    BUS = "BUS"
    JEEP = "JEEP"
    E_TRIKE = "E_TRIKE"


class MaterialCategory(str, Enum):
    DIGITAL = "DIGITAL"
    NON_DIGITAL = "NON_DIGITAL"


class MaterialStatus(str, Enum):
    """Administrative status of a material, fed by operators."""

    AVAILABLE = "AVAILABLE"
    MAINTENANCE = "MAINTENANCE"


class AvailabilityStatus(str, Enum):
    """Derived status of a material for a queried interval."""

    AVAILABLE = "AVAILABLE"
    FULL = "FULL"
    MAINTENANCE = "MAINTENANCE"


class AssignmentStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    RUNNING = "RUNNING"
    ENDED = "ENDED"


class BookingState(str, Enum):
    """States a single booking attempt moves through."""

    REQUESTED = "REQUESTED"
    VALIDATING = "VALIDATING"
    COMMITTED = "COMMITTED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class Interval:
    """
    Closed day interval [start, end].

    Both boundary days belong to the interval, so two intervals that share a
    single day overlap.
    """
    start: date
    end: date

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(f"Interval end {self.end} is before start {self.start}")

    @classmethod
    def for_duration(cls, start: date, duration_days: int) -> "Interval":
        return cls(start=start, end=start + timedelta(days=duration_days))

    def overlaps(self, other: "Interval") -> bool:
        return self.start <= other.end and other.start <= self.end


@dataclass(frozen=True)
class Occupancy:
    """A capacity-consuming interval on one material."""
    interval: Interval
    slot_count: int = 1
    assignment_id: Optional[UUID] = None


@dataclass(frozen=True)
class MaterialProfile:
    """The subset of a material the calculator needs."""
    material_id: str
    total_slots: int
    status: MaterialStatus = MaterialStatus.AVAILABLE
    material_type: Optional[MaterialType] = None
    vehicle_type: Optional[VehicleType] = None
    category: Optional[MaterialCategory] = None
    id: Optional[UUID] = None


@dataclass
class AvailabilitySnapshot:
    """Availability of one material over a desired interval. Never persisted."""
    material_id: str
    total_slots: int
    occupied_slots: int
    available_slots: int
    status: AvailabilityStatus
    can_accept_ad: bool
    next_available_date: Optional[date] = None
    all_slots_free_date: Optional[date] = None
    material_uuid: Optional[UUID] = None


@dataclass
class PlanAvailability:
    """Plan-level verdict combined from every compatible material."""
    can_create: bool
    material_availabilities: List[AvailabilitySnapshot] = field(default_factory=list)
    total_available_slots: int = 0
    available_materials_count: int = 0
    next_available_date: Optional[date] = None
    desired_interval: Optional[Interval] = None


@dataclass
class BookingOutcome:
    """Terminal result of one attempt against one material."""
    state: BookingState
    material_id: str
    assignment_id: Optional[UUID] = None
    reason: Optional[str] = None


@dataclass
class ReservationResult:
    success: bool
    material_id: Optional[str] = None
    assignment_id: Optional[UUID] = None
    failure_reason: Optional[str] = None
    next_available_date: Optional[date] = None
    attempts: int = 0


@dataclass
class AvailabilitySummary:
    """Fleet-wide counters for dashboards."""
    total_materials: int = 0
    total_slots: int = 0
    occupied_slots: int = 0
    available_slots: int = 0
    utilization_rate: float = 0.0
    available_materials: int = 0
    full_materials: int = 0
    maintenance_materials: int = 0
