"""
Availability calculation for a single material.

Everything here is pure: callers pass the material and the capacity-consuming
intervals they read from the ledger, and get an AvailabilitySnapshot back.
"""
import logging
from datetime import date, timedelta
from typing import Iterable, List, Optional

from availability_engine.core.types import (
    AvailabilitySnapshot,
    AvailabilityStatus,
    Interval,
    MaterialProfile,
    MaterialStatus,
    Occupancy,
)

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


def overlapping(occupancies: Iterable[Occupancy], interval: Interval) -> List[Occupancy]:
    """Occupancies whose closed interval shares at least one day with `interval`."""
    return [occ for occ in occupancies if occ.interval.overlaps(interval)]


def peak_occupancy(occupancies: Iterable[Occupancy], interval: Interval) -> int:
    """
    Maximum number of slots held at the same instant inside `interval`.

    Sweeps the boundaries left to right. A slot is released on the day after
    its interval ends, and releases are applied before acquisitions that fall
    on the same day.
    """
    events = []
    for occ in overlapping(occupancies, interval):
        events.append((max(occ.interval.start, interval.start), occ.slot_count))
        events.append((occ.interval.end + ONE_DAY, -occ.slot_count))

    events.sort()

    current = 0
    peak = 0
    for _day, delta in events:
        current += delta
        peak = max(peak, current)
    return peak


def next_available_date(
    material: MaterialProfile,
    occupancies: Iterable[Occupancy],
    desired: Interval,
    slots_requested: int = 1,
) -> Optional[date]:
    """
    Earliest day after `desired.start` from which a window as long as
    `desired` has `slots_requested` free slots.

    Candidates are the days after each interval that ends on or after the
    desired start, tried in order. Returns None when the request can never
    fit (under maintenance, or asking for more slots than the material has).
    """
    if material.status == MaterialStatus.MAINTENANCE:
        return None
    if slots_requested > material.total_slots:
        return None

    occupancies = list(occupancies)
    length = desired.end - desired.start
    candidates = sorted(
        {
            occ.interval.end + ONE_DAY
            for occ in occupancies
            if occ.interval.end >= desired.start
        }
    )

    for candidate in candidates:
        if candidate <= desired.start:
            continue
        window = Interval(candidate, candidate + length)
        free = material.total_slots - peak_occupancy(occupancies, window)
        if free >= slots_requested:
            return candidate

    return None


def all_slots_free_date(occupancies: Iterable[Occupancy], desired: Interval) -> date:
    """Day after the last interval that touches or follows the desired window."""
    ends = [occ.interval.end for occ in occupancies if occ.interval.end >= desired.start]
    if not ends:
        return desired.start
    return max(ends) + ONE_DAY


class AvailabilityCalculator:
    """Evaluates one material against a desired interval."""

    def evaluate(
        self,
        material: MaterialProfile,
        occupancies: Iterable[Occupancy],
        desired: Interval,
        slots_requested: int = 1,
    ) -> AvailabilitySnapshot:
        occupancies = list(occupancies)

        occupied = peak_occupancy(occupancies, desired)
        available = max(material.total_slots - occupied, 0)

        if material.status == MaterialStatus.MAINTENANCE:
            status = AvailabilityStatus.MAINTENANCE
        elif available <= 0:
            status = AvailabilityStatus.FULL
        else:
            status = AvailabilityStatus.AVAILABLE

        can_accept = status == AvailabilityStatus.AVAILABLE and available >= slots_requested

        next_date = None
        if not can_accept:
            next_date = next_available_date(material, occupancies, desired, slots_requested)

        logger.debug(
            f"Material {material.material_id}: {occupied}/{material.total_slots} slots "
            f"occupied over {desired.start}..{desired.end}, status={status.value}"
        )

        return AvailabilitySnapshot(
            material_id=material.material_id,
            total_slots=material.total_slots,
            occupied_slots=occupied,
            available_slots=available,
            status=status,
            can_accept_ad=can_accept,
            next_available_date=next_date,
            all_slots_free_date=all_slots_free_date(occupancies, desired),
            material_uuid=material.id,
        )
