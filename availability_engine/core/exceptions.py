"""Domain errors raised by the availability engine."""


class AvailabilityError(Exception):
    """Base class. `code` is stable and safe to return to API clients."""

    code = "AVAILABILITY_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PlanNotFound(AvailabilityError):
    code = "PLAN_NOT_FOUND"


class MaterialNotFound(AvailabilityError):
    code = "MATERIAL_NOT_FOUND"


class AssignmentNotFound(AvailabilityError):
    code = "ASSIGNMENT_NOT_FOUND"


class NoCompatibleMaterials(AvailabilityError):
    """No material matches the plan's type, vehicle and category. Not retryable."""

    code = "NO_COMPATIBLE_MATERIALS"


class AllMaterialsFull(AvailabilityError):
    """
    Compatible materials exist but none accepts the interval.

    Reported as a reservation failure reason rather than raised.
    """

    code = "ALL_MATERIALS_FULL"


class NoSuitableMaterial(AvailabilityError):
    code = "NO_SUITABLE_MATERIAL"


class CapacityExceeded(AvailabilityError):
    """A write would push peak occupancy over the material's capacity."""

    code = "CAPACITY_EXCEEDED"


class MaterialUnderMaintenance(AvailabilityError):
    code = "MATERIAL_UNDER_MAINTENANCE"


class MaterialInUse(AvailabilityError):
    code = "MATERIAL_IN_USE"


class InvalidStatusTransition(AvailabilityError):
    code = "INVALID_STATUS_TRANSITION"


class IncompatibleMaterialType(AvailabilityError):
    """The material type cannot be mounted on the vehicle type."""

    code = "INCOMPATIBLE_MATERIAL_TYPE"
