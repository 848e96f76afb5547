"""create_availability_tables

Revision ID: 3f2a9c1d7e40
Revises:
Create Date: 2026-10-17 10:12:04.118273

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7e40"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "materials",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("material_id", sa.String(length=32), nullable=False),
        sa.Column("material_type", sa.String(length=16), nullable=False),
        sa.Column("vehicle_type", sa.String(length=16), nullable=False),
        sa.Column("category", sa.String(length=16), nullable=False),
        sa.Column("total_slots", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.CheckConstraint("total_slots >= 1 AND total_slots <= 10", name="check_total_slots"),
        sa.CheckConstraint("status IN ('AVAILABLE', 'MAINTENANCE')", name="check_material_status"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_materials_material_id", "materials", ["material_id"], unique=True)

    op.create_table(
        "ads_plans",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("material_type", sa.String(length=16), nullable=False),
        sa.Column("vehicle_type", sa.String(length=16), nullable=False),
        sa.Column("category", sa.String(length=16), nullable=False),
        sa.Column("duration_days", sa.Integer(), nullable=False),
        sa.Column("number_of_devices", sa.Integer(), nullable=False),
        sa.Column("price", sa.Float(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.CheckConstraint("duration_days > 0", name="check_duration_days"),
        sa.CheckConstraint("number_of_devices > 0", name="check_number_of_devices"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "assignments",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("material_id", sa.String(length=32), nullable=False),
        sa.Column("plan_id", sa.Uuid(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("slot_count", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("ad_reference", sa.String(length=255), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.CheckConstraint("end_date >= start_date", name="check_assignment_dates"),
        sa.CheckConstraint("slot_count > 0", name="check_slot_count"),
        sa.CheckConstraint(
            "status IN ('PENDING', 'APPROVED', 'REJECTED', 'RUNNING', 'ENDED')",
            name="check_assignment_status",
        ),
        sa.ForeignKeyConstraint(
            ["material_id"], ["materials.material_id"], ondelete="RESTRICT"
        ),
        sa.ForeignKeyConstraint(["plan_id"], ["ads_plans.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )

    # Ledger reads filter by material and status
    op.create_index(
        "ix_assignments_material_status", "assignments", ["material_id", "status"]
    )


def downgrade() -> None:
    op.drop_index("ix_assignments_material_status", table_name="assignments")
    op.drop_table("assignments")
    op.drop_table("ads_plans")
    op.drop_index("ix_materials_material_id", table_name="materials")
    op.drop_table("materials")
