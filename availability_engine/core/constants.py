from availability_engine.core.types import AssignmentStatus, MaterialType, VehicleType

# Statuses whose assignments hold a slot. PENDING only counts while its window
# has not ended yet.
CAPACITY_CONSUMING_STATUSES = (
    AssignmentStatus.PENDING,
    AssignmentStatus.APPROVED,
    AssignmentStatus.RUNNING,
)

ALLOWED_STATUS_TRANSITIONS = {
    AssignmentStatus.PENDING: {AssignmentStatus.APPROVED, AssignmentStatus.REJECTED},
    AssignmentStatus.APPROVED: {AssignmentStatus.RUNNING, AssignmentStatus.REJECTED},
    AssignmentStatus.RUNNING: {AssignmentStatus.ENDED},
    AssignmentStatus.REJECTED: set(),
    AssignmentStatus.ENDED: set(),
}

# Which material can be mounted on which vehicle
ALLOWED_MATERIALS_BY_VEHICLE = {
    VehicleType.CAR: {
        MaterialType.POSTER,
        MaterialType.LCD,
        MaterialType.STICKER,
        MaterialType.HEADDRESS,
        MaterialType.BANNER,
    },
    VehicleType.BUS: {MaterialType.STICKER, MaterialType.HEADDRESS},
    VehicleType.JEEP: {MaterialType.POSTER, MaterialType.STICKER},
    VehicleType.MOTORCYCLE: {MaterialType.LCD, MaterialType.BANNER},
    VehicleType.E_TRIKE: {MaterialType.BANNER, MaterialType.LCD},
}

# Material code prefixes, e.g. DGL-0001 / NDGL-0001
MATERIAL_CODE_PREFIXES = {
    "DIGITAL": "DGL",
    "NON_DIGITAL": "NDGL",
}
MATERIAL_CODE_DIGITS = 4

MIN_TOTAL_SLOTS = 1
MAX_TOTAL_SLOTS = 10
