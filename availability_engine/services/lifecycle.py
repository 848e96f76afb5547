"""Assignment status transitions."""

import logging
from datetime import date
from typing import Dict, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from availability_engine.core.constants import ALLOWED_STATUS_TRANSITIONS
from availability_engine.core.exceptions import InvalidStatusTransition
from availability_engine.core.types import AssignmentStatus
from availability_engine.db.models import Assignment
from availability_engine.services.slot_ledger import SlotLedger

logger = logging.getLogger(__name__)


class AssignmentLifecycle:
    """Moves assignments along PENDING -> APPROVED/REJECTED -> RUNNING -> ENDED."""

    def __init__(self, db: AsyncSession, today: Optional[date] = None):
        self.db = db
        self.ledger = SlotLedger(db, today=today)

    @property
    def today(self) -> date:
        return self.ledger.today

    async def transition(self, assignment_id: UUID, new_status: AssignmentStatus) -> Assignment:
        assignment = await self.ledger.get_assignment(assignment_id)
        current = AssignmentStatus(assignment.status)

        if new_status not in ALLOWED_STATUS_TRANSITIONS[current]:
            raise InvalidStatusTransition(
                f"Assignment {assignment_id} cannot go from {current.value} to {new_status.value}"
            )

        if new_status in (AssignmentStatus.REJECTED, AssignmentStatus.ENDED):
            # Frees the slot right away
            assignment = await self.ledger.retire(assignment_id, new_status)
        else:
            assignment.status = new_status.value

        await self.db.commit()
        await self.db.refresh(assignment)
        logger.info(f"Assignment {assignment_id}: {current.value} -> {new_status.value}")
        return assignment

    async def advance(self) -> Dict[str, int]:
        """
        Apply the calendar to approved and running assignments.

        APPROVED assignments whose window has started become RUNNING, and
        APPROVED/RUNNING assignments whose window is over become ENDED.
        """
        today = self.today
        result = await self.db.execute(
            select(Assignment).where(
                Assignment.status.in_(
                    [AssignmentStatus.APPROVED.value, AssignmentStatus.RUNNING.value]
                )
            )
        )

        started = 0
        ended = 0
        for assignment in result.scalars().all():
            if assignment.end_date < today:
                assignment.status = AssignmentStatus.ENDED.value
                ended += 1
            elif (
                assignment.status == AssignmentStatus.APPROVED.value
                and assignment.start_date <= today
            ):
                assignment.status = AssignmentStatus.RUNNING.value
                started += 1

        await self.db.commit()
        logger.info(f"Lifecycle sweep for {today}: {started} started, {ended} ended")
        return {"started": started, "ended": ended}
