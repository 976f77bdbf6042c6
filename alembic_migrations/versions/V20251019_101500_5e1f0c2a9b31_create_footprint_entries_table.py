"""create_footprint_entries_table

Revision ID: 5e1f0c2a9b31
Revises:
Create Date: 2025-10-19 10:15:00.412871

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "5e1f0c2a9b31"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "footprint_entries",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column(
            "user_id",
            sa.String(length=255),
            nullable=True,
            comment="Identity provider user id, null for anonymous calculations",
        ),
        sa.Column(
            "activity", sa.String(length=100), nullable=False, comment="Activity key"
        ),
        sa.Column("value", sa.Float(), nullable=False, comment="Input quantity"),
        sa.Column(
            "unit",
            sa.String(length=20),
            nullable=False,
            comment="Unit of the input quantity",
        ),
        sa.Column(
            "co2e", sa.Float(), nullable=False, comment="Kilograms of CO2-equivalent"
        ),
        sa.Column(
            "region",
            sa.String(length=10),
            nullable=False,
            comment="Region tag of the estimate",
        ),
        sa.Column(
            "timestamp",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="When the estimate was produced",
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        comment="Logged activities with their estimated CO2e",
    )
    op.create_index(
        "ix_footprint_entries_user_timestamp",
        "footprint_entries",
        ["user_id", "timestamp"],
        unique=False,
    )
    op.create_index(
        "ix_footprint_entries_timestamp",
        "footprint_entries",
        ["timestamp"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_footprint_entries_timestamp", table_name="footprint_entries")
    op.drop_index("ix_footprint_entries_user_timestamp", table_name="footprint_entries")
    op.drop_table("footprint_entries")
