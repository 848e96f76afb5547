"""Tests for assignment status transitions."""

from datetime import date
from uuid import uuid4

import pytest

from availability_engine.core.exceptions import AssignmentNotFound, InvalidStatusTransition
from availability_engine.core.types import AssignmentStatus
from availability_engine.services.lifecycle import AssignmentLifecycle
from availability_engine.services.slot_ledger import SlotLedger
from tests.factories import create_assignment, create_material

TODAY = date(2026, 3, 10)


@pytest.mark.asyncio
async def test_pending_to_approved_to_running_to_ended(db_session):
    await create_material(db_session, "DGL-0001")
    assignment = await create_assignment(
        db_session, "DGL-0001", date(2026, 3, 8), date(2026, 3, 12), status="PENDING"
    )

    lifecycle = AssignmentLifecycle(db_session, today=TODAY)
    for status in (AssignmentStatus.APPROVED, AssignmentStatus.RUNNING, AssignmentStatus.ENDED):
        updated = await lifecycle.transition(assignment.id, status)
        assert updated.status == status.value


@pytest.mark.asyncio
async def test_rejecting_frees_slot(db_session):
    """Test that a rejected request stops holding capacity."""
    await create_material(db_session, "DGL-0001", total_slots=1)
    assignment = await create_assignment(
        db_session, "DGL-0001", date(2026, 3, 8), date(2026, 3, 12), status="PENDING"
    )

    lifecycle = AssignmentLifecycle(db_session, today=TODAY)
    await lifecycle.transition(assignment.id, AssignmentStatus.REJECTED)

    assert await SlotLedger(db_session, today=TODAY).intervals_for("DGL-0001") == []


@pytest.mark.asyncio
async def test_invalid_transition(db_session):
    await create_material(db_session, "DGL-0001")
    assignment = await create_assignment(
        db_session, "DGL-0001", date(2026, 3, 8), date(2026, 3, 12), status="ENDED"
    )

    lifecycle = AssignmentLifecycle(db_session, today=TODAY)
    with pytest.raises(InvalidStatusTransition):
        await lifecycle.transition(assignment.id, AssignmentStatus.RUNNING)


@pytest.mark.asyncio
async def test_pending_cannot_skip_approval(db_session):
    await create_material(db_session, "DGL-0001")
    assignment = await create_assignment(
        db_session, "DGL-0001", date(2026, 3, 8), date(2026, 3, 12), status="PENDING"
    )

    lifecycle = AssignmentLifecycle(db_session, today=TODAY)
    with pytest.raises(InvalidStatusTransition):
        await lifecycle.transition(assignment.id, AssignmentStatus.RUNNING)


@pytest.mark.asyncio
async def test_transition_unknown_assignment(db_session):
    lifecycle = AssignmentLifecycle(db_session, today=TODAY)
    with pytest.raises(AssignmentNotFound):
        await lifecycle.transition(uuid4(), AssignmentStatus.APPROVED)


@pytest.mark.asyncio
async def test_advance_starts_and_ends_assignments(db_session):
    """Test the calendar sweep over approved and running assignments."""
    await create_material(db_session, "DGL-0001")
    starting = await create_assignment(
        db_session, "DGL-0001", date(2026, 3, 10), date(2026, 3, 14), status="APPROVED"
    )
    future = await create_assignment(
        db_session, "DGL-0001", date(2026, 3, 20), date(2026, 3, 24), status="APPROVED"
    )
    finished = await create_assignment(
        db_session, "DGL-0001", date(2026, 3, 1), date(2026, 3, 9), status="RUNNING"
    )
    missed = await create_assignment(
        db_session, "DGL-0001", date(2026, 3, 1), date(2026, 3, 5), status="APPROVED"
    )
    pending = await create_assignment(
        db_session, "DGL-0001", date(2026, 3, 1), date(2026, 3, 5), status="PENDING"
    )

    lifecycle = AssignmentLifecycle(db_session, today=TODAY)
    counts = await lifecycle.advance()

    assert counts == {"started": 1, "ended": 2}

    ledger = SlotLedger(db_session, today=TODAY)
    assert (await ledger.get_assignment(starting.id)).status == "RUNNING"
    assert (await ledger.get_assignment(future.id)).status == "APPROVED"
    assert (await ledger.get_assignment(finished.id)).status == "ENDED"
    assert (await ledger.get_assignment(missed.id)).status == "ENDED"
    assert (await ledger.get_assignment(pending.id)).status == "PENDING"
