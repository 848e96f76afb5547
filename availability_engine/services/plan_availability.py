"""Plan-level availability, built from per-material snapshots."""

import logging
from datetime import date
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from availability_engine.core.calculator import AvailabilityCalculator
from availability_engine.core.exceptions import (
    MaterialNotFound,
    NoCompatibleMaterials,
    PlanNotFound,
)
from availability_engine.core.types import (
    AvailabilitySnapshot,
    AvailabilityStatus,
    AvailabilitySummary,
    Interval,
    PlanAvailability,
)
from availability_engine.db.models import AdsPlan, Material
from availability_engine.services.slot_ledger import SlotLedger, material_profile

logger = logging.getLogger(__name__)


class PlanAvailabilityAggregator:
    """
    Answers "can this plan start on that day?".

    Read-only and lock-free: results may be stale by the time a booking is
    attempted, which is why the coordinator evaluates again under the lock.
    """

    def __init__(
        self,
        db: AsyncSession,
        today: Optional[date] = None,
        calculator: Optional[AvailabilityCalculator] = None,
    ):
        self.db = db
        self.ledger = SlotLedger(db, today=today)
        self.calculator = calculator or AvailabilityCalculator()

    @property
    def today(self) -> date:
        return self.ledger.today

    async def get_plan(self, plan_id: UUID) -> AdsPlan:
        result = await self.db.execute(select(AdsPlan).where(AdsPlan.id == plan_id))
        plan = result.scalar_one_or_none()
        if plan is None:
            raise PlanNotFound(f"Plan {plan_id} not found")
        return plan

    async def compatible_materials(self, plan: AdsPlan) -> List[Material]:
        """Materials matching the plan's type, vehicle and category, ordered by code."""
        result = await self.db.execute(
            select(Material)
            .where(Material.material_type == plan.material_type)
            .where(Material.vehicle_type == plan.vehicle_type)
            .where(Material.category == plan.category)
            .order_by(Material.material_id)
            .execution_options(populate_existing=True)
        )
        materials = list(result.scalars().all())
        if not materials:
            raise NoCompatibleMaterials(
                f"No {plan.material_type} materials for {plan.vehicle_type} "
                f"({plan.category}) exist"
            )
        return materials

    async def evaluate_material(
        self,
        material: Material,
        desired: Interval,
        slots_requested: int = 1,
    ) -> AvailabilitySnapshot:
        occupancies = await self.ledger.intervals_for(material.material_id)
        return self.calculator.evaluate(
            material_profile(material), occupancies, desired, slots_requested
        )

    async def evaluate_plan(self, plan: AdsPlan, desired_start: date) -> PlanAvailability:
        desired = Interval.for_duration(desired_start, plan.duration_days)
        materials = await self.compatible_materials(plan)

        snapshots = []
        for material in materials:
            snapshots.append(
                await self.evaluate_material(material, desired, plan.number_of_devices)
            )

        accepting = [snap for snap in snapshots if snap.can_accept_ad]
        can_create = bool(accepting)

        next_date = None
        if not can_create:
            dates = [snap.next_available_date for snap in snapshots if snap.next_available_date]
            next_date = min(dates) if dates else None

        availability = PlanAvailability(
            can_create=can_create,
            material_availabilities=snapshots,
            total_available_slots=sum(
                snap.available_slots
                for snap in snapshots
                if snap.status == AvailabilityStatus.AVAILABLE
            ),
            available_materials_count=len(accepting),
            next_available_date=next_date,
            desired_interval=desired,
        )
        logger.info(
            f"Plan {plan.id} from {desired.start}: can_create={can_create}, "
            f"{len(accepting)}/{len(snapshots)} materials accept"
        )
        return availability

    async def get_plan_availability(self, plan_id: UUID, desired_start: date) -> PlanAvailability:
        plan = await self.get_plan(plan_id)
        return await self.evaluate_plan(plan, desired_start)

    async def get_materials_availability(
        self, material_ids: Sequence[str]
    ) -> List[AvailabilitySnapshot]:
        """Snapshots for the given materials, evaluated for today only."""
        today = Interval(self.today, self.today)
        snapshots = []
        for material_id in material_ids:
            try:
                material = await self.ledger.get_material(material_id)
            except MaterialNotFound:
                logger.warning(f"Availability requested for unknown material {material_id}")
                raise
            snapshots.append(await self.evaluate_material(material, today))
        return snapshots

    async def get_availability_summary(self) -> AvailabilitySummary:
        result = await self.db.execute(select(Material).order_by(Material.material_id))
        materials = result.scalars().all()

        today = Interval(self.today, self.today)
        summary = AvailabilitySummary(total_materials=len(materials))
        for material in materials:
            snapshot = await self.evaluate_material(material, today)
            summary.total_slots += snapshot.total_slots
            summary.occupied_slots += snapshot.occupied_slots
            summary.available_slots += snapshot.available_slots
            if snapshot.status == AvailabilityStatus.AVAILABLE:
                summary.available_materials += 1
            elif snapshot.status == AvailabilityStatus.FULL:
                summary.full_materials += 1
            else:
                summary.maintenance_materials += 1

        if summary.total_slots > 0:
            summary.utilization_rate = summary.occupied_slots / summary.total_slots * 100
        return summary
