"""API dependencies."""

from datetime import date

from fastapi import HTTPException, status

from availability_engine.core.exceptions import (
    AssignmentNotFound,
    AvailabilityError,
    CapacityExceeded,
    IncompatibleMaterialType,
    InvalidStatusTransition,
    MaterialInUse,
    MaterialNotFound,
    NoCompatibleMaterials,
    PlanNotFound,
)
from availability_engine.db.session import get_db
from availability_engine.services.reservation import MaterialLockRegistry, material_locks

get_db_session = get_db

ERROR_STATUS_CODES = {
    PlanNotFound: status.HTTP_404_NOT_FOUND,
    MaterialNotFound: status.HTTP_404_NOT_FOUND,
    AssignmentNotFound: status.HTTP_404_NOT_FOUND,
    NoCompatibleMaterials: status.HTTP_404_NOT_FOUND,
    CapacityExceeded: status.HTTP_409_CONFLICT,
    MaterialInUse: status.HTTP_409_CONFLICT,
    InvalidStatusTransition: status.HTTP_409_CONFLICT,
    IncompatibleMaterialType: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def get_today() -> date:
    """Current date for availability queries."""
    return date.today()


def get_material_locks() -> MaterialLockRegistry:
    return material_locks


def http_error(error: AvailabilityError) -> HTTPException:
    """Translate a domain error into an HTTPException."""
    return HTTPException(
        status_code=ERROR_STATUS_CODES.get(type(error), status.HTTP_400_BAD_REQUEST),
        detail={"code": error.code, "message": error.message},
    )
