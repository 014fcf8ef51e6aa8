"""Base schema: sites, hits, browser_stats.

Revision ID: 000_base
Revises:
Create Date: 2025-03-01 00:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "000_base"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # 1) sites (tenant + stats checkpoint)
    op.create_table(
        "sites",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("last_stat", sa.DateTime(), nullable=True),
    )

    # 2) hits (raw telemetry; created_at is naive UTC so the varchar hour truncation is stable)
    op.create_table(
        "hits",
        sa.Column("id", sa.BigInteger().with_variant(sa.Integer(), "sqlite"), primary_key=True, autoincrement=True),
        sa.Column("tenant_id", sa.Text(), nullable=False),
        sa.Column("browser", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_hits_tenant_created", "hits", ["tenant_id", "created_at"], unique=False)

    # 3) browser_stats (daily rollup; uniqueness kept by delete-then-insert, no unique constraint)
    op.create_table(
        "browser_stats",
        sa.Column("id", sa.BigInteger().with_variant(sa.Integer(), "sqlite"), primary_key=True, autoincrement=True),
        sa.Column("tenant_id", sa.Text(), nullable=False),
        sa.Column("day", sa.Date(), nullable=False),
        sa.Column("browser", sa.Text(), nullable=False),
        sa.Column("version", sa.Text(), nullable=False),
        sa.Column("count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("mobile", sa.Boolean(), nullable=False, server_default=sa.text("false")),
    )
    op.create_index("ix_browser_stats_tenant_day", "browser_stats", ["tenant_id", "day"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_browser_stats_tenant_day", table_name="browser_stats")
    op.drop_table("browser_stats")

    op.drop_index("ix_hits_tenant_created", table_name="hits")
    op.drop_table("hits")

    op.drop_table("sites")
