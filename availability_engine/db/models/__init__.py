"""Database models package."""

from availability_engine.db.base import Base
from availability_engine.db.models.ads_plan import AdsPlan
from availability_engine.db.models.assignment import Assignment
from availability_engine.db.models.material import Material

__all__ = [
    "Base",
    "AdsPlan",
    "Assignment",
    "Material",
]
