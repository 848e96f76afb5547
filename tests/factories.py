"""Helpers that put catalog and ledger rows straight into the database."""

from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from availability_engine.db.models import AdsPlan, Assignment, Material


async def create_material(
    db: AsyncSession,
    material_id: str,
    total_slots: int = 5,
    material_type: str = "LCD",
    vehicle_type: str = "CAR",
    category: str = "DIGITAL",
    status: str = "AVAILABLE",
) -> Material:
    material = Material(
        material_id=material_id,
        material_type=material_type,
        vehicle_type=vehicle_type,
        category=category,
        total_slots=total_slots,
        status=status,
    )
    db.add(material)
    await db.commit()
    await db.refresh(material)
    return material


async def create_plan(
    db: AsyncSession,
    duration_days: int = 4,
    number_of_devices: int = 1,
    material_type: str = "LCD",
    vehicle_type: str = "CAR",
    category: str = "DIGITAL",
    name: str = "Test Plan",
) -> AdsPlan:
    plan = AdsPlan(
        name=name,
        material_type=material_type,
        vehicle_type=vehicle_type,
        category=category,
        duration_days=duration_days,
        number_of_devices=number_of_devices,
    )
    db.add(plan)
    await db.commit()
    await db.refresh(plan)
    return plan


async def create_assignment(
    db: AsyncSession,
    material_id: str,
    start_date: date,
    end_date: date,
    status: str = "APPROVED",
    slot_count: int = 1,
) -> Assignment:
    assignment = Assignment(
        material_id=material_id,
        start_date=start_date,
        end_date=end_date,
        status=status,
        slot_count=slot_count,
    )
    db.add(assignment)
    await db.commit()
    await db.refresh(assignment)
    return assignment
