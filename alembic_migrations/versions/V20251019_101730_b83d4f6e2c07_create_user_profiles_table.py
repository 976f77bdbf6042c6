"""create_user_profiles_table

Revision ID: b83d4f6e2c07
Revises: 5e1f0c2a9b31
Create Date: 2025-10-19 10:17:30.095214

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "b83d4f6e2c07"
down_revision = "5e1f0c2a9b31"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "user_profiles",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column(
            "user_id",
            sa.String(length=255),
            nullable=False,
            comment="Identity provider user id",
        ),
        sa.Column("full_name", sa.String(length=255), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column(
            "carbon_goal",
            sa.Float(),
            nullable=True,
            comment="Monthly CO2e goal in kilograms",
        ),
        sa.Column("preferences", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
    )


def downgrade() -> None:
    op.drop_table("user_profiles")
