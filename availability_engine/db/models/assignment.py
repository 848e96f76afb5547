"""Assignment model."""

from uuid import uuid4

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Uuid,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from availability_engine.db.base import Base


class Assignment(Base):
    """
    One campaign booked onto one material for a closed range of days.

    Rows are never deleted; rejection and completion are recorded by status.
    """

    __tablename__ = "assignments"

    id = Column(Uuid, primary_key=True, default=uuid4)
    material_id = Column(
        String(32),
        ForeignKey("materials.material_id", ondelete="RESTRICT"),
        nullable=False,
    )
    plan_id = Column(
        Uuid,
        ForeignKey("ads_plans.id", ondelete="SET NULL"),
        nullable=True,
    )

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    slot_count = Column(Integer, nullable=False, default=1)
    status = Column(String(16), nullable=False, default="PENDING")
    # Reference to the campaign record owned by the ad service
    ad_reference = Column(String(255), nullable=True)

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
        CheckConstraint("end_date >= start_date", name="check_assignment_dates"),
        CheckConstraint("slot_count > 0", name="check_slot_count"),
        CheckConstraint(
            "status IN ('PENDING', 'APPROVED', 'REJECTED', 'RUNNING', 'ENDED')",
            name="check_assignment_status",
        ),
        Index("ix_assignments_material_status", "material_id", "status"),
    )

    material = relationship("Material", back_populates="assignments")
    plan = relationship("AdsPlan", back_populates="assignments")

    def __repr__(self):
        return (
            f"<Assignment(id={self.id}, material_id={self.material_id}, "
            f"{self.start_date}..{self.end_date}, status={self.status})>"
        )
