"""AdsPlan endpoints."""

from datetime import date
from typing import List
from uuid import UUID

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
from availability_engine.db.models import AdsPlan
from availability_engine.schemas.availability import (
    AvailabilitySnapshotResponse,
    PlanAvailabilityResponse,
    ReservationRequest,
    ReservationResponse,
)
from availability_engine.schemas.plan import PlanCreate, PlanResponse
from availability_engine.services.plan_availability import PlanAvailabilityAggregator
from availability_engine.services.reservation import MaterialLockRegistry, ReservationCoordinator

router = APIRouter()


def check_start_date(desired_start_date: date, today: date):
    if desired_start_date < today:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Desired start date {desired_start_date} is in the past",
        )


@router.post("/", response_model=PlanResponse, status_code=status.HTTP_201_CREATED)
async def create_plan(
    plan_data: PlanCreate,
    db: AsyncSession = Depends(get_db_session),
):
    """Create a new plan."""
    data = plan_data.model_dump()
    for field in ("material_type", "vehicle_type", "category"):
        data[field] = data[field].value

    plan = AdsPlan(**data)
    db.add(plan)
    await db.commit()
    await db.refresh(plan)
    return plan


@router.get("/", response_model=List[PlanResponse])
async def list_plans(
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(get_db_session),
):
    """List all plans."""
    result = await db.execute(
        select(AdsPlan).offset(skip).limit(limit).order_by(AdsPlan.created_at.desc())
    )
    return result.scalars().all()


@router.get("/{plan_id}", response_model=PlanResponse)
async def get_plan(
    plan_id: UUID,
    db: AsyncSession = Depends(get_db_session),
):
    """Get a specific plan by ID."""
    result = await db.execute(select(AdsPlan).where(AdsPlan.id == plan_id))
    plan = result.scalar_one_or_none()

    if not plan:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Plan with id {plan_id} not found",
        )

    return plan


@router.get("/{plan_id}/availability", response_model=PlanAvailabilityResponse)
async def get_plan_availability(
    plan_id: UUID,
    desired_start_date: date = Query(..., description="First day of the campaign"),
    db: AsyncSession = Depends(get_db_session),
    today: date = Depends(get_today),
):
    """Whether the plan can start on the given day, and if not, when."""
    check_start_date(desired_start_date, today)

    aggregator = PlanAvailabilityAggregator(db, today=today)
    try:
        availability = await aggregator.get_plan_availability(plan_id, desired_start_date)
    except AvailabilityError as e:
        raise http_error(e)

    return PlanAvailabilityResponse(
        plan_id=plan_id,
        desired_start_date=availability.desired_interval.start,
        desired_end_date=availability.desired_interval.end,
        can_create=availability.can_create,
        material_availabilities=[
            AvailabilitySnapshotResponse.model_validate(snapshot)
            for snapshot in availability.material_availabilities
        ],
        total_available_slots=availability.total_available_slots,
        available_materials_count=availability.available_materials_count,
        next_available_date=availability.next_available_date,
    )


@router.post("/{plan_id}/reserve", response_model=ReservationResponse)
async def reserve_material_for_plan(
    plan_id: UUID,
    reservation: ReservationRequest,
    db: AsyncSession = Depends(get_db_session),
    locks: MaterialLockRegistry = Depends(get_material_locks),
    today: date = Depends(get_today),
):
    """
    Book the best compatible material for the plan.

    A failed booking is not an HTTP error: the response carries
    `success=false` and the reason.
    """
    check_start_date(reservation.desired_start_date, today)

    coordinator = ReservationCoordinator(db, locks=locks, today=today)
    try:
        return await coordinator.reserve_material_for_plan(
            plan_id,
            reservation.desired_start_date,
            ad_reference=reservation.ad_reference,
        )
    except AvailabilityError as e:
        raise http_error(e)
