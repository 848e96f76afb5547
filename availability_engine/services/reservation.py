"""Booking of plan campaigns onto materials."""

import asyncio
import logging
from datetime import date
from typing import Dict, Optional, Set
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from availability_engine.config import settings
from availability_engine.core.calculator import AvailabilityCalculator
from availability_engine.core.exceptions import (
    AllMaterialsFull,
    CapacityExceeded,
    MaterialUnderMaintenance,
    NoCompatibleMaterials,
    NoSuitableMaterial,
)
from availability_engine.core.selector import SmartMaterialSelector
from availability_engine.core.types import (
    AvailabilityStatus,
    BookingOutcome,
    BookingState,
    Interval,
    ReservationResult,
)
from availability_engine.services.plan_availability import PlanAvailabilityAggregator
from availability_engine.services.slot_ledger import SlotLedger, material_profile

logger = logging.getLogger(__name__)


class MaterialLockRegistry:
    """
    One asyncio.Lock per material code.

    Serializes writers against the same material inside this process only. A
    deployment with several processes needs the ledger in a shared
    transactional store for the guarantee to hold across them.
    """

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}

    def lock_for(self, material_id: str) -> asyncio.Lock:
        lock = self._locks.get(material_id)
        if lock is None:
            lock = self._locks.setdefault(material_id, asyncio.Lock())
        return lock

    def discard(self, material_id: str):
        """Forget the lock of a material that no longer exists."""
        self._locks.pop(material_id, None)

    def __contains__(self, material_id: str) -> bool:
        return material_id in self._locks

    def clear(self):
        self._locks.clear()


# Process-wide registry used by the API
material_locks = MaterialLockRegistry()


class ReservationCoordinator:
    """
    Commits assignments without ever exceeding a material's capacity.

    Each attempt takes the material's lock, evaluates the material again from
    fresh ledger data, and only then inserts and commits. Losing a race rejects
    the attempt; `reserve_material_for_plan` then moves on to the next best
    material, up to `max_attempts` tries.
    """

    def __init__(
        self,
        db: AsyncSession,
        locks: Optional[MaterialLockRegistry] = None,
        max_attempts: Optional[int] = None,
        today: Optional[date] = None,
    ):
        self.db = db
        self.locks = locks if locks is not None else material_locks
        self.max_attempts = max_attempts or settings.RESERVATION_MAX_ATTEMPTS
        self.aggregator = PlanAvailabilityAggregator(db, today=today)
        self.ledger = SlotLedger(db, today=self.aggregator.today)
        self.calculator = AvailabilityCalculator()
        self.selector = SmartMaterialSelector()

    async def book(
        self,
        material_id: str,
        interval: Interval,
        slot_count: int = 1,
        plan_id: Optional[UUID] = None,
        ad_reference: Optional[str] = None,
    ) -> BookingOutcome:
        """Run one booking attempt against one material to a terminal state."""
        outcome = BookingOutcome(state=BookingState.REQUESTED, material_id=material_id)

        async with self.locks.lock_for(material_id):
            outcome.state = BookingState.VALIDATING
            try:
                material = await self.ledger.get_material(material_id)
                occupancies = await self.ledger.intervals_for(material_id)
                snapshot = self.calculator.evaluate(
                    material_profile(material), occupancies, interval, slot_count
                )

                if snapshot.status == AvailabilityStatus.MAINTENANCE:
                    raise MaterialUnderMaintenance(f"Material {material_id} is under maintenance")
                if not snapshot.can_accept_ad:
                    raise CapacityExceeded(
                        f"Material {material_id} has {snapshot.available_slots} free slot(s), "
                        f"{slot_count} needed"
                    )

                assignment = await self.ledger.insert(
                    material,
                    interval,
                    slot_count=slot_count,
                    plan_id=plan_id,
                    ad_reference=ad_reference,
                )
                await self.db.commit()
                outcome.state = BookingState.COMMITTED
                outcome.assignment_id = assignment.id
            except (MaterialUnderMaintenance, CapacityExceeded) as e:
                # Nothing was written, the session stays usable for the next attempt
                outcome.state = BookingState.REJECTED
                outcome.reason = e.code
            except Exception:
                await self.db.rollback()
                raise

        if outcome.state == BookingState.COMMITTED:
            logger.info(
                f"Booked {slot_count} slot(s) on {material_id} for "
                f"{interval.start}..{interval.end} (assignment {outcome.assignment_id})"
            )
        else:
            logger.warning(
                f"Booking on {material_id} for {interval.start}..{interval.end} "
                f"rejected: {outcome.reason}"
            )
        return outcome

    async def reserve_material_for_plan(
        self,
        plan_id: UUID,
        desired_start: date,
        ad_reference: Optional[str] = None,
    ) -> ReservationResult:
        """
        Pick the best compatible material for the plan and book it.

        PlanNotFound propagates. Every other failure is reported in the result.
        """
        plan = await self.aggregator.get_plan(plan_id)
        plan_key = plan.id
        duration_days = plan.duration_days
        slots_requested = plan.number_of_devices

        tried: Set[str] = set()
        last_reason = None
        next_date = None
        attempts = 0

        while attempts < self.max_attempts:
            try:
                plan = await self.aggregator.get_plan(plan_key)
                availability = await self.aggregator.evaluate_plan(plan, desired_start)
            except NoCompatibleMaterials as e:
                return ReservationResult(success=False, failure_reason=e.code)

            untried = [
                snap
                for snap in availability.material_availabilities
                if snap.material_id not in tried
            ]
            try:
                chosen = self.selector.select(untried)
            except NoSuitableMaterial:
                next_date = availability.next_available_date
                if attempts == 0:
                    logger.info(f"No material accepts plan {plan_key} from {desired_start}")
                    return ReservationResult(
                        success=False,
                        failure_reason=AllMaterialsFull.code,
                        next_available_date=next_date,
                    )
                break

            tried.add(chosen.material_id)
            attempts += 1

            outcome = await self.book(
                chosen.material_id,
                Interval.for_duration(desired_start, duration_days),
                slot_count=slots_requested,
                plan_id=plan_key,
                ad_reference=ad_reference,
            )
            if outcome.state == BookingState.COMMITTED:
                return ReservationResult(
                    success=True,
                    material_id=outcome.material_id,
                    assignment_id=outcome.assignment_id,
                    attempts=attempts,
                )
            last_reason = outcome.reason

        logger.warning(
            f"Reservation for plan {plan_key} from {desired_start} failed after "
            f"{attempts} attempt(s): {last_reason}"
        )
        return ReservationResult(
            success=False,
            failure_reason=last_reason or CapacityExceeded.code,
            next_available_date=next_date,
            attempts=attempts,
        )
