"""Material model."""

from uuid import uuid4

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from availability_engine.db.base import Base


class Material(Base):
    """Physical advertising surface mounted on a vehicle, with a fixed slot capacity."""

    __tablename__ = "materials"

    id = Column(Uuid, primary_key=True, default=uuid4)
    # Human readable code, e.g. DGL-0001
    material_id = Column(String(32), nullable=False, unique=True, index=True)
    material_type = Column(String(16), nullable=False)
    vehicle_type = Column(String(16), nullable=False)
    category = Column(String(16), nullable=False)
    total_slots = Column(Integer, nullable=False)
    status = Column(String(16), nullable=False, default="AVAILABLE")
    description = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("total_slots >= 1 AND total_slots <= 10", name="check_total_slots"),
        CheckConstraint("status IN ('AVAILABLE', 'MAINTENANCE')", name="check_material_status"),
    )

    # Relationships
    assignments = relationship("Assignment", back_populates="material", passive_deletes="all")

    def __repr__(self):
        return f"<Material(material_id={self.material_id}, total_slots={self.total_slots})>"
