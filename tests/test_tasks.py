"""Tests for background tasks."""

from datetime import date

import pytest

from availability_engine.config import settings
from availability_engine.services.slot_ledger import SlotLedger
from availability_engine.tasks.lifecycle_tasks import advance_assignments_task
from tests.factories import create_assignment, create_material


@pytest.mark.asyncio
async def test_advance_assignments_task(monkeypatch, test_engine, db_session):
    """Test running the lifecycle sweep the way the worker does."""
    monkeypatch.setattr(
        settings, "DATABASE_URL", test_engine.url.render_as_string(hide_password=False)
    )
    await create_material(db_session, "DGL-0001")
    running = await create_assignment(db_session, "DGL-0001", date(2026, 3, 1), date(2026, 3, 5))

    counts = await advance_assignments_task("2026-03-02")

    assert counts == {"started": 1, "ended": 0}
    assignment = await SlotLedger(db_session).get_assignment(running.id)
    assert assignment.status == "RUNNING"
