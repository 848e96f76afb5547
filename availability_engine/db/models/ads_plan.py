"""AdsPlan model."""

from uuid import uuid4

from sqlalchemy import CheckConstraint, Column, DateTime, Float, Integer, String, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from availability_engine.db.base import Base


class AdsPlan(Base):
    """Campaign template: which materials qualify and for how long."""

    __tablename__ = "ads_plans"

    id = Column(Uuid, primary_key=True, default=uuid4)
    name = Column(String(255), nullable=False)
    material_type = Column(String(16), nullable=False)
    vehicle_type = Column(String(16), nullable=False)
    category = Column(String(16), nullable=False)
    duration_days = Column(Integer, nullable=False)
    number_of_devices = Column(Integer, nullable=False, default=1)
    price = Column(Float, nullable=True)
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
        CheckConstraint("duration_days > 0", name="check_duration_days"),
        CheckConstraint("number_of_devices > 0", name="check_number_of_devices"),
    )

    assignments = relationship("Assignment", back_populates="plan", passive_deletes=True)

    def __repr__(self):
        return f"<AdsPlan(id={self.id}, name={self.name})>"
