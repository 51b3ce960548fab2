"""create_registrations_table

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-10-16 09:12:41.508113

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9b7d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "registrations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("homepass_id", sa.String(length=17), nullable=False),
        sa.Column("customer_name", sa.String(length=100), nullable=False),
        sa.Column("phone_number", sa.String(length=13), nullable=False),
        sa.Column("latitude", sa.Numeric(precision=10, scale=8), nullable=False),
        sa.Column("longitude", sa.Numeric(precision=11, scale=8), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("ktp_file_name", sa.String(length=255), nullable=True),
        sa.Column("house_photo_file_name", sa.String(length=255), nullable=True),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
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
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ux_registrations_homepass_id", "registrations", ["homepass_id"], unique=True
    )
    op.create_index(
        "ix_registrations_submitted_at", "registrations", ["submitted_at"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_registrations_submitted_at", table_name="registrations")
    op.drop_index("ux_registrations_homepass_id", table_name="registrations")
    op.drop_table("registrations")
