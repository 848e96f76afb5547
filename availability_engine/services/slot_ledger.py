"""Slot ledger backed by the assignments table."""

import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from availability_engine.core.calculator import peak_occupancy
from availability_engine.core.constants import CAPACITY_CONSUMING_STATUSES
from availability_engine.core.exceptions import (
    AssignmentNotFound,
    CapacityExceeded,
    MaterialNotFound,
)
from availability_engine.core.types import (
    AssignmentStatus,
    Interval,
    MaterialCategory,
    MaterialProfile,
    MaterialStatus,
    MaterialType,
    Occupancy,
    VehicleType,
)
from availability_engine.db.models import Assignment, Material

logger = logging.getLogger(__name__)


def material_profile(material: Material) -> MaterialProfile:
    """Convert a Material row into the value the calculator works with."""
    return MaterialProfile(
        material_id=material.material_id,
        total_slots=material.total_slots,
        status=MaterialStatus(material.status),
        material_type=MaterialType(material.material_type),
        vehicle_type=VehicleType(material.vehicle_type),
        category=MaterialCategory(material.category),
        id=material.id,
    )


def capacity_consuming(as_of: date):
    """Filter for assignments that hold a slot as of `as_of`."""
    return or_(
        Assignment.status.in_(
            [AssignmentStatus.APPROVED.value, AssignmentStatus.RUNNING.value]
        ),
        and_(
            Assignment.status == AssignmentStatus.PENDING.value,
            Assignment.end_date >= as_of,
        ),
    )


class SlotLedger:
    """
    Per-material store of occupied intervals.

    Reads never lock. `insert` is only safe against races when the caller holds
    the material's lock (see ReservationCoordinator); its own capacity check is
    a second line of defence. Nothing here commits.
    """

    def __init__(self, db: AsyncSession, today: Optional[date] = None):
        self.db = db
        self.today = today or date.today()

    async def get_material(self, material_id: str) -> Material:
        """Fetch a material, always re-reading the row from the database."""
        result = await self.db.execute(
            select(Material)
            .where(Material.material_id == material_id)
            .execution_options(populate_existing=True)
        )
        material = result.scalar_one_or_none()
        if material is None:
            raise MaterialNotFound(f"Material {material_id} not found")
        return material

    async def intervals_for(self, material_id: str) -> List[Occupancy]:
        """Capacity-consuming intervals of a material, ordered by start."""
        result = await self.db.execute(
            select(
                Assignment.id,
                Assignment.start_date,
                Assignment.end_date,
                Assignment.slot_count,
            )
            .where(Assignment.material_id == material_id)
            .where(capacity_consuming(self.today))
            .order_by(Assignment.start_date, Assignment.end_date, Assignment.id)
        )
        return [
            Occupancy(
                interval=Interval(row.start_date, row.end_date),
                slot_count=row.slot_count,
                assignment_id=row.id,
            )
            for row in result.all()
        ]

    async def future_peak(self, material_id: str) -> int:
        """Highest occupancy from today onwards."""
        occupancies = await self.intervals_for(material_id)
        if not occupancies:
            return 0
        horizon = max(occ.interval.end for occ in occupancies)
        if horizon < self.today:
            return 0
        return peak_occupancy(occupancies, Interval(self.today, horizon))

    async def insert(
        self,
        material: Material,
        interval: Interval,
        slot_count: int = 1,
        plan_id: Optional[UUID] = None,
        ad_reference: Optional[str] = None,
    ) -> Assignment:
        """
        Record a new PENDING assignment.

        Raises CapacityExceeded if, with the new interval included, any day of
        the interval would hold more than `total_slots`.
        """
        occupancies = await self.intervals_for(material.material_id)
        occupancies.append(Occupancy(interval=interval, slot_count=slot_count))

        peak = peak_occupancy(occupancies, interval)
        if peak > material.total_slots:
            raise CapacityExceeded(
                f"Material {material.material_id} would hold {peak} of "
                f"{material.total_slots} slots over {interval.start}..{interval.end}"
            )

        assignment = Assignment(
            material_id=material.material_id,
            plan_id=plan_id,
            start_date=interval.start,
            end_date=interval.end,
            slot_count=slot_count,
            status=AssignmentStatus.PENDING.value,
            ad_reference=ad_reference,
        )
        self.db.add(assignment)
        await self.db.flush()
        return assignment

    async def get_assignment(self, assignment_id: UUID) -> Assignment:
        result = await self.db.execute(
            select(Assignment)
            .where(Assignment.id == assignment_id)
            .execution_options(populate_existing=True)
        )
        assignment = result.scalar_one_or_none()
        if assignment is None:
            raise AssignmentNotFound(f"Assignment {assignment_id} not found")
        return assignment

    async def retire(
        self,
        assignment_id: UUID,
        status: AssignmentStatus = AssignmentStatus.REJECTED,
    ) -> Assignment:
        """Free the slot held by an assignment by moving it to REJECTED or ENDED."""
        if status in CAPACITY_CONSUMING_STATUSES:
            raise ValueError(f"Cannot retire an assignment into {status.value}")

        assignment = await self.get_assignment(assignment_id)
        assignment.status = status.value
        await self.db.flush()
        logger.info(
            f"Assignment {assignment_id} on {assignment.material_id} retired as {status.value}"
        )
        return assignment

    async def has_assignments(self, material_id: str) -> bool:
        result = await self.db.execute(
            select(Assignment.id).where(Assignment.material_id == material_id).limit(1)
        )
        return result.first() is not None
