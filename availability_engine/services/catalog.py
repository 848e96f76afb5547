"""Material and plan catalog administration."""

import logging
from datetime import date
from typing import Optional

from sqlalchemy import Integer, cast, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from availability_engine.config import settings
from availability_engine.core.constants import (
    ALLOWED_MATERIALS_BY_VEHICLE,
    MATERIAL_CODE_DIGITS,
    MATERIAL_CODE_PREFIXES,
)
from availability_engine.core.exceptions import (
    CapacityExceeded,
    IncompatibleMaterialType,
    MaterialInUse,
)
from availability_engine.core.types import (
    MaterialCategory,
    MaterialStatus,
    MaterialType,
    VehicleType,
)
from availability_engine.db.models import Material
from availability_engine.services.reservation import MaterialLockRegistry, material_locks
from availability_engine.services.slot_ledger import SlotLedger

logger = logging.getLogger(__name__)


def check_vehicle_compatibility(material_type: MaterialType, vehicle_type: VehicleType):
    allowed = ALLOWED_MATERIALS_BY_VEHICLE.get(vehicle_type, set())
    if material_type not in allowed:
        raise IncompatibleMaterialType(
            f"{material_type.value} cannot be mounted on {vehicle_type.value}; "
            f"allowed: {', '.join(sorted(m.value for m in allowed))}"
        )


async def next_material_code(db: AsyncSession, category: MaterialCategory) -> str:
    """Next free code for the category, e.g. DGL-0003."""
    prefix = MATERIAL_CODE_PREFIXES[category.value]
    # Numeric max, so DGL-10000 sorts after DGL-9999
    suffix = cast(func.substr(Material.material_id, len(prefix) + 2), Integer)
    result = await db.execute(
        select(func.max(suffix)).where(Material.material_id.like(f"{prefix}-%"))
    )
    last_number = result.scalar_one_or_none()
    number = last_number + 1 if last_number else 1
    return f"{prefix}-{number:0{MATERIAL_CODE_DIGITS}d}"


class MaterialCatalog:
    """Administrative operations on materials."""

    def __init__(
        self,
        db: AsyncSession,
        locks: Optional[MaterialLockRegistry] = None,
        today: Optional[date] = None,
    ):
        self.db = db
        self.locks = locks if locks is not None else material_locks
        self.ledger = SlotLedger(db, today=today)

    async def create_material(
        self,
        material_type: MaterialType,
        vehicle_type: VehicleType,
        category: MaterialCategory,
        total_slots: Optional[int] = None,
        description: Optional[str] = None,
    ) -> Material:
        check_vehicle_compatibility(material_type, vehicle_type)

        # Code generation and insert must not interleave within a category
        code_lock = self.locks.lock_for(f"code:{MATERIAL_CODE_PREFIXES[category.value]}")
        async with code_lock:
            material = Material(
                material_id=await next_material_code(self.db, category),
                material_type=material_type.value,
                vehicle_type=vehicle_type.value,
                category=category.value,
                total_slots=total_slots or settings.DEFAULT_TOTAL_SLOTS,
                status=MaterialStatus.AVAILABLE.value,
                description=description,
            )
            self.db.add(material)
            await self.db.commit()
        await self.db.refresh(material)
        logger.info(f"Created material {material.material_id} with {material.total_slots} slots")
        return material

    async def set_status(self, material_id: str, status: MaterialStatus) -> Material:
        material = await self.ledger.get_material(material_id)
        material.status = status.value
        await self.db.commit()
        await self.db.refresh(material)
        logger.info(f"Material {material_id} is now {status.value}")
        return material

    async def reconfigure_capacity(self, material_id: str, total_slots: int) -> Material:
        """
        Change a material's slot count.

        Runs under the material's booking lock. Refused if bookings from today on
        already need more slots than the new capacity.
        """
        async with self.locks.lock_for(material_id):
            material = await self.ledger.get_material(material_id)
            peak = await self.ledger.future_peak(material_id)
            if total_slots < peak:
                raise CapacityExceeded(
                    f"Material {material_id} has bookings holding {peak} slots; "
                    f"cannot shrink to {total_slots}"
                )
            previous = material.total_slots
            material.total_slots = total_slots
            await self.db.commit()
            await self.db.refresh(material)

        logger.info(f"Material {material_id} capacity changed from {previous} to {total_slots}")
        return material

    async def retire_material(self, material_id: str):
        """Delete a material that has never been assigned."""
        async with self.locks.lock_for(material_id):
            material = await self.ledger.get_material(material_id)
            if await self.ledger.has_assignments(material_id):
                raise MaterialInUse(f"Material {material_id} has assignments and cannot be retired")
            await self.db.delete(material)
            await self.db.commit()
        self.locks.discard(material_id)
        logger.info(f"Material {material_id} retired")
