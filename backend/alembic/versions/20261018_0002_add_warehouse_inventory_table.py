"""add warehouse inventory table

Revision ID: 20261018_0002
Revises: 20261018_0001
Create Date: 2026-10-18 09:20:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261018_0002"
down_revision = "20261018_0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "warehouse_inventory",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("sku_id", sa.Integer(), nullable=False),
        sa.Column("warehouse_code", sa.String(length=50), nullable=False, server_default="MAIN"),
        sa.Column("total_quantity", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("reserved_quantity", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("available_quantity", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(["sku_id"], ["skus.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("sku_id", "warehouse_code", name="uq_warehouse_inventory_sku_warehouse"),
        sa.CheckConstraint("total_quantity >= 0", name="ck_warehouse_inventory_total_non_negative"),
        sa.CheckConstraint("reserved_quantity >= 0", name="ck_warehouse_inventory_reserved_non_negative"),
    )
    op.create_index("ix_warehouse_inventory_id", "warehouse_inventory", ["id"], unique=False)
    op.create_index("ix_warehouse_inventory_sku_id", "warehouse_inventory", ["sku_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_warehouse_inventory_sku_id", table_name="warehouse_inventory")
    op.drop_index("ix_warehouse_inventory_id", table_name="warehouse_inventory")
    op.drop_table("warehouse_inventory")
