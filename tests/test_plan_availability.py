"""Tests for plan availability aggregation."""

from datetime import date
from uuid import uuid4

import pytest

from availability_engine.core.exceptions import (
    MaterialNotFound,
    NoCompatibleMaterials,
    PlanNotFound,
)
from availability_engine.core.types import AvailabilityStatus, Interval
from availability_engine.services.plan_availability import PlanAvailabilityAggregator
from tests.factories import create_assignment, create_material, create_plan

TODAY = date(2026, 1, 1)


@pytest.mark.asyncio
async def test_plan_availability_aggregates_materials(db_session):
    """Test totals across a full and a free material."""
    await create_material(db_session, "DGL-0001", total_slots=2)
    await create_material(db_session, "DGL-0002", total_slots=3)
    await create_assignment(db_session, "DGL-0001", date(2026, 3, 1), date(2026, 3, 10))
    await create_assignment(db_session, "DGL-0001", date(2026, 3, 5), date(2026, 3, 15))
    await create_assignment(db_session, "DGL-0002", date(2026, 3, 9), date(2026, 3, 9))
    plan = await create_plan(db_session, duration_days=4)

    aggregator = PlanAvailabilityAggregator(db_session, today=TODAY)
    availability = await aggregator.get_plan_availability(plan.id, date(2026, 3, 8))

    assert availability.can_create is True
    assert availability.desired_interval == Interval(date(2026, 3, 8), date(2026, 3, 12))
    assert availability.available_materials_count == 1
    assert availability.total_available_slots == 2
    assert availability.next_available_date is None

    by_code = {snap.material_id: snap for snap in availability.material_availabilities}
    assert by_code["DGL-0001"].status == AvailabilityStatus.FULL
    assert by_code["DGL-0001"].next_available_date == date(2026, 3, 11)
    assert by_code["DGL-0002"].occupied_slots == 1
    assert by_code["DGL-0002"].available_slots == 2


@pytest.mark.asyncio
async def test_plan_availability_earliest_next_date(db_session):
    """Test that a fully booked plan reports the earliest date any material frees up."""
    await create_material(db_session, "DGL-0001", total_slots=1)
    await create_material(db_session, "DGL-0002", total_slots=1)
    await create_assignment(db_session, "DGL-0001", date(2026, 3, 1), date(2026, 3, 20))
    await create_assignment(db_session, "DGL-0002", date(2026, 3, 1), date(2026, 3, 12))
    plan = await create_plan(db_session, duration_days=2)

    aggregator = PlanAvailabilityAggregator(db_session, today=TODAY)
    availability = await aggregator.get_plan_availability(plan.id, date(2026, 3, 5))

    assert availability.can_create is False
    assert availability.available_materials_count == 0
    assert availability.total_available_slots == 0
    assert availability.next_available_date == date(2026, 3, 13)


@pytest.mark.asyncio
async def test_plan_availability_excludes_maintenance_from_totals(db_session):
    await create_material(db_session, "DGL-0001", total_slots=4, status="MAINTENANCE")
    await create_material(db_session, "DGL-0002", total_slots=2)
    plan = await create_plan(db_session)

    aggregator = PlanAvailabilityAggregator(db_session, today=TODAY)
    availability = await aggregator.get_plan_availability(plan.id, date(2026, 3, 5))

    assert availability.can_create is True
    assert availability.total_available_slots == 2
    assert availability.available_materials_count == 1
    statuses = {snap.material_id: snap.status for snap in availability.material_availabilities}
    assert statuses["DGL-0001"] == AvailabilityStatus.MAINTENANCE


@pytest.mark.asyncio
async def test_plan_availability_all_under_maintenance(db_session):
    """Test that maintenance-only fleets report no date to retry on."""
    await create_material(db_session, "DGL-0001", status="MAINTENANCE")
    plan = await create_plan(db_session)

    aggregator = PlanAvailabilityAggregator(db_session, today=TODAY)
    availability = await aggregator.get_plan_availability(plan.id, date(2026, 3, 5))

    assert availability.can_create is False
    assert availability.next_available_date is None


@pytest.mark.asyncio
async def test_plan_availability_multi_device_plan(db_session):
    """Test that a plan needing two devices is refused by a material with one free slot."""
    await create_material(db_session, "DGL-0001", total_slots=3)
    await create_assignment(
        db_session, "DGL-0001", date(2026, 3, 1), date(2026, 3, 10), slot_count=2
    )
    plan = await create_plan(db_session, duration_days=3, number_of_devices=2)

    aggregator = PlanAvailabilityAggregator(db_session, today=TODAY)
    availability = await aggregator.get_plan_availability(plan.id, date(2026, 3, 5))

    assert availability.can_create is False
    assert availability.total_available_slots == 1
    assert availability.next_available_date == date(2026, 3, 11)


@pytest.mark.asyncio
async def test_plan_availability_only_matching_materials(db_session):
    await create_material(db_session, "DGL-0001")
    await create_material(db_session, "NDGL-0001", material_type="STICKER", category="NON_DIGITAL")
    plan = await create_plan(db_session)

    aggregator = PlanAvailabilityAggregator(db_session, today=TODAY)
    availability = await aggregator.get_plan_availability(plan.id, date(2026, 3, 5))

    assert [snap.material_id for snap in availability.material_availabilities] == ["DGL-0001"]


@pytest.mark.asyncio
async def test_plan_availability_no_compatible_materials(db_session):
    await create_material(db_session, "DGL-0001")
    plan = await create_plan(db_session, material_type="STICKER", vehicle_type="BUS")

    aggregator = PlanAvailabilityAggregator(db_session, today=TODAY)
    with pytest.raises(NoCompatibleMaterials):
        await aggregator.get_plan_availability(plan.id, date(2026, 3, 5))


@pytest.mark.asyncio
async def test_plan_availability_unknown_plan(db_session):
    aggregator = PlanAvailabilityAggregator(db_session, today=TODAY)
    with pytest.raises(PlanNotFound):
        await aggregator.get_plan_availability(uuid4(), date(2026, 3, 5))


@pytest.mark.asyncio
async def test_plan_availability_is_repeatable(db_session):
    """Test that asking twice without writes in between gives the same answer."""
    await create_material(db_session, "DGL-0001", total_slots=2)
    await create_assignment(db_session, "DGL-0001", date(2026, 3, 1), date(2026, 3, 10))
    plan = await create_plan(db_session)

    aggregator = PlanAvailabilityAggregator(db_session, today=TODAY)
    first = await aggregator.get_plan_availability(plan.id, date(2026, 3, 5))
    second = await aggregator.get_plan_availability(plan.id, date(2026, 3, 5))

    assert first == second


@pytest.mark.asyncio
async def test_materials_availability_for_today(db_session):
    await create_material(db_session, "DGL-0001", total_slots=2)
    await create_material(db_session, "DGL-0002", total_slots=1)
    await create_assignment(db_session, "DGL-0002", date(2025, 12, 20), date(2026, 1, 5))
    await create_assignment(db_session, "DGL-0001", date(2026, 3, 1), date(2026, 3, 5))

    aggregator = PlanAvailabilityAggregator(db_session, today=TODAY)
    snapshots = await aggregator.get_materials_availability(["DGL-0002", "DGL-0001"])

    assert [snap.material_id for snap in snapshots] == ["DGL-0002", "DGL-0001"]
    assert snapshots[0].status == AvailabilityStatus.FULL
    assert snapshots[0].next_available_date == date(2026, 1, 6)
    assert snapshots[1].status == AvailabilityStatus.AVAILABLE
    assert snapshots[1].available_slots == 2


@pytest.mark.asyncio
async def test_materials_availability_unknown_material(db_session):
    await create_material(db_session, "DGL-0001")

    aggregator = PlanAvailabilityAggregator(db_session, today=TODAY)
    with pytest.raises(MaterialNotFound):
        await aggregator.get_materials_availability(["DGL-0001", "DGL-0404"])


@pytest.mark.asyncio
async def test_availability_summary(db_session):
    await create_material(db_session, "DGL-0001", total_slots=2)
    await create_material(db_session, "DGL-0002", total_slots=1)
    await create_material(db_session, "DGL-0003", total_slots=1, status="MAINTENANCE")
    await create_assignment(db_session, "DGL-0001", date(2025, 12, 20), date(2026, 1, 5))
    await create_assignment(db_session, "DGL-0002", date(2025, 12, 20), date(2026, 1, 5))

    aggregator = PlanAvailabilityAggregator(db_session, today=TODAY)
    summary = await aggregator.get_availability_summary()

    assert summary.total_materials == 3
    assert summary.total_slots == 4
    assert summary.occupied_slots == 2
    assert summary.available_slots == 2
    assert summary.utilization_rate == pytest.approx(50.0)
    assert summary.available_materials == 1
    assert summary.full_materials == 1
    assert summary.maintenance_materials == 1
