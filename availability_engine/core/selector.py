"""Smart material selection."""

import logging
from typing import Iterable, List

from availability_engine.core.exceptions import NoSuitableMaterial
from availability_engine.core.types import AvailabilitySnapshot

logger = logging.getLogger(__name__)


class SmartMaterialSelector:
    """
    Picks the material a new booking goes to.

    Only materials that can accept the ad qualify. Among those the one with the
    most free slots wins, so bookings spread across the fleet instead of
    filling one material first. Remaining ties go to the lowest material code.

    The snapshots are read without any lock, so whatever is chosen here still
    has to be re-checked when the booking commits.
    """

    def rank(self, snapshots: Iterable[AvailabilitySnapshot]) -> List[AvailabilitySnapshot]:
        """All qualifying candidates, best first."""
        candidates = [snap for snap in snapshots if snap.can_accept_ad]
        return sorted(candidates, key=lambda snap: (-snap.available_slots, snap.material_id))

    def select(self, snapshots: Iterable[AvailabilitySnapshot]) -> AvailabilitySnapshot:
        ranked = self.rank(snapshots)
        if not ranked:
            raise NoSuitableMaterial("No compatible material can accept the ad")

        best = ranked[0]
        logger.info(
            f"Selected material {best.material_id} with {best.available_slots} free slots "
            f"out of {len(ranked)} candidates"
        )
        return best
