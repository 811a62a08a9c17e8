"""create pricing_tier

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from tiersync.adapters.sqlalchemy.mappings import UTCDateTime

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "pricing_tier",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("price_minor_units", sa.Integer(), nullable=False),
        sa.Column("service_category", sa.String(), nullable=False),
        sa.Column("estimated_duration", sa.String(), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.Column("external_product_id", sa.String(), nullable=True),
        sa.Column("external_price_id", sa.String(), nullable=True),
        sa.Column(
            "created_at",
            UTCDateTime(),
            server_default=sa.func.current_timestamp(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            UTCDateTime(),
            server_default=sa.func.current_timestamp(),
            nullable=False,
        ),
        sa.CheckConstraint(
            "external_price_id IS NULL OR external_product_id IS NOT NULL",
            name=op.f("ck_pricing_tier_price_requires_product"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_pricing_tier")),
    )
    op.create_index("ix_pricing_tier_sort_order", "pricing_tier", ["sort_order"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_pricing_tier_sort_order", table_name="pricing_tier")
    op.drop_table("pricing_tier")
