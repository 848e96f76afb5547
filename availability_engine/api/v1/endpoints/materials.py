"""Material endpoints."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from availability_engine.api.deps import (
    get_db_session,
    get_material_locks,
    get_today,
    http_error,
)
from availability_engine.core.exceptions import AvailabilityError
from availability_engine.core.types import (
    MaterialCategory,
    MaterialStatus,
    MaterialType,
    VehicleType,
)
from availability_engine.db.models import Material
from availability_engine.schemas.availability import (
    AvailabilitySnapshotResponse,
    AvailabilitySummaryResponse,
    MaterialsAvailabilityRequest,
)
from availability_engine.schemas.material import (
    MaterialCapacityUpdate,
    MaterialCreate,
    MaterialResponse,
    MaterialStatusUpdate,
)
from availability_engine.services.catalog import MaterialCatalog
from availability_engine.services.plan_availability import PlanAvailabilityAggregator
from availability_engine.services.reservation import MaterialLockRegistry

router = APIRouter()


@router.post("/", response_model=MaterialResponse, status_code=status.HTTP_201_CREATED)
async def create_material(
    material_data: MaterialCreate,
    db: AsyncSession = Depends(get_db_session),
    locks: MaterialLockRegistry = Depends(get_material_locks),
):
    """Create a new material. Its code is generated from the category."""
    catalog = MaterialCatalog(db, locks=locks)
    try:
        return await catalog.create_material(**material_data.model_dump())
    except AvailabilityError as e:
        raise http_error(e)


@router.get("/", response_model=List[MaterialResponse])
async def list_materials(
    material_type: Optional[MaterialType] = Query(None, description="Filter by material type"),
    vehicle_type: Optional[VehicleType] = Query(None, description="Filter by vehicle type"),
    category: Optional[MaterialCategory] = Query(None, description="Filter by category"),
    status_filter: Optional[MaterialStatus] = Query(None, description="Filter by status"),
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(get_db_session),
):
    """List materials, optionally filtered."""
    query = select(Material).offset(skip).limit(limit).order_by(Material.material_id)

    if material_type:
        query = query.where(Material.material_type == material_type.value)
    if vehicle_type:
        query = query.where(Material.vehicle_type == vehicle_type.value)
    if category:
        query = query.where(Material.category == category.value)
    if status_filter:
        query = query.where(Material.status == status_filter.value)

    result = await db.execute(query)
    return result.scalars().all()


@router.post("/availability", response_model=List[AvailabilitySnapshotResponse])
async def get_materials_availability(
    request: MaterialsAvailabilityRequest,
    db: AsyncSession = Depends(get_db_session),
    today: date = Depends(get_today),
):
    """Availability of the given materials for today."""
    aggregator = PlanAvailabilityAggregator(db, today=today)
    try:
        return await aggregator.get_materials_availability(request.material_ids)
    except AvailabilityError as e:
        raise http_error(e)


@router.get("/availability/summary", response_model=AvailabilitySummaryResponse)
async def get_availability_summary(
    db: AsyncSession = Depends(get_db_session),
    today: date = Depends(get_today),
):
    """Fleet-wide slot usage for today."""
    aggregator = PlanAvailabilityAggregator(db, today=today)
    return await aggregator.get_availability_summary()


@router.get("/{material_id}", response_model=MaterialResponse)
async def get_material(
    material_id: str,
    db: AsyncSession = Depends(get_db_session),
):
    """Get a specific material by its code."""
    result = await db.execute(select(Material).where(Material.material_id == material_id))
    material = result.scalar_one_or_none()

    if not material:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Material with id {material_id} not found",
        )

    return material


@router.patch("/{material_id}/status", response_model=MaterialResponse)
async def update_material_status(
    material_id: str,
    status_data: MaterialStatusUpdate,
    db: AsyncSession = Depends(get_db_session),
):
    """Put a material into maintenance or back into service."""
    catalog = MaterialCatalog(db)
    try:
        return await catalog.set_status(material_id, status_data.status)
    except AvailabilityError as e:
        raise http_error(e)


@router.patch("/{material_id}/capacity", response_model=MaterialResponse)
async def update_material_capacity(
    material_id: str,
    capacity_data: MaterialCapacityUpdate,
    db: AsyncSession = Depends(get_db_session),
    locks: MaterialLockRegistry = Depends(get_material_locks),
    today: date = Depends(get_today),
):
    """Change the number of slots a material has."""
    catalog = MaterialCatalog(db, locks=locks, today=today)
    try:
        return await catalog.reconfigure_capacity(material_id, capacity_data.total_slots)
    except AvailabilityError as e:
        raise http_error(e)


@router.delete("/{material_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_material(
    material_id: str,
    db: AsyncSession = Depends(get_db_session),
    locks: MaterialLockRegistry = Depends(get_material_locks),
):
    """Retire a material that has never been assigned."""
    catalog = MaterialCatalog(db, locks=locks)
    try:
        await catalog.retire_material(material_id)
    except AvailabilityError as e:
        raise http_error(e)
