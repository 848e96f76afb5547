"""Assignment endpoints."""

from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from availability_engine.api.deps import get_db_session, get_today, http_error
from availability_engine.core.exceptions import AvailabilityError
from availability_engine.core.types import AssignmentStatus
from availability_engine.db.models import Assignment
from availability_engine.schemas.assignment import (
    AssignmentResponse,
    AssignmentStatusUpdate,
    LifecycleSweepResult,
)
from availability_engine.services.lifecycle import AssignmentLifecycle
from availability_engine.services.slot_ledger import SlotLedger

router = APIRouter()


@router.get("/", response_model=List[AssignmentResponse])
async def list_assignments(
    material_id: Optional[str] = Query(None, description="Filter by material code"),
    plan_id: Optional[UUID] = Query(None, description="Filter by plan ID"),
    status_filter: Optional[AssignmentStatus] = Query(None, description="Filter by status"),
    start_date: Optional[date] = Query(None, description="Assignments ending on or after"),
    end_date: Optional[date] = Query(None, description="Assignments starting on or before"),
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(get_db_session),
):
    """List assignments with optional filters."""
    query = (
        select(Assignment)
        .offset(skip)
        .limit(limit)
        .order_by(Assignment.start_date, Assignment.material_id)
    )

    if material_id:
        query = query.where(Assignment.material_id == material_id)
    if plan_id:
        query = query.where(Assignment.plan_id == plan_id)
    if status_filter:
        query = query.where(Assignment.status == status_filter.value)
    if start_date:
        query = query.where(Assignment.end_date >= start_date)
    if end_date:
        query = query.where(Assignment.start_date <= end_date)

    result = await db.execute(query)
    return result.scalars().all()


@router.post("/lifecycle/advance", response_model=LifecycleSweepResult)
async def advance_lifecycle(
    db: AsyncSession = Depends(get_db_session),
    today: date = Depends(get_today),
):
    """Start and end assignments according to today's date."""
    lifecycle = AssignmentLifecycle(db, today=today)
    return await lifecycle.advance()


@router.get("/{assignment_id}", response_model=AssignmentResponse)
async def get_assignment(
    assignment_id: UUID,
    db: AsyncSession = Depends(get_db_session),
):
    """Get a specific assignment by ID."""
    try:
        return await SlotLedger(db).get_assignment(assignment_id)
    except AvailabilityError as e:
        raise http_error(e)


@router.patch("/{assignment_id}/status", response_model=AssignmentResponse)
async def update_assignment_status(
    assignment_id: UUID,
    status_data: AssignmentStatusUpdate,
    db: AsyncSession = Depends(get_db_session),
    today: date = Depends(get_today),
):
    """Move an assignment to its next status. REJECTED and ENDED free the slot."""
    lifecycle = AssignmentLifecycle(db, today=today)
    try:
        return await lifecycle.transition(assignment_id, status_data.status)
    except AvailabilityError as e:
        raise http_error(e)
