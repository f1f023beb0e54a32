"""add reorder history table

Revision ID: 20261018_0004
Revises: 20261018_0003
Create Date: 2026-10-18 09:51:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261018_0004"
down_revision = "20261018_0003"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "reorder_history",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("sku_id", sa.Integer(), nullable=False),
        sa.Column("trigger_type", sa.String(length=20), nullable=False),
        sa.Column("trigger_timestamp", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("inventory_level", sa.Numeric(12, 2), nullable=False),
        sa.Column("min_threshold", sa.Numeric(12, 2), nullable=False),
        sa.Column("optimal_threshold", sa.Numeric(12, 2), nullable=False),
        sa.Column("reorder_quantity", sa.Numeric(12, 2), nullable=False),
        sa.Column("vendor_id", sa.Integer(), nullable=True),
        sa.Column("purchase_order_id", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["sku_id"], ["skus.id"]),
        sa.ForeignKeyConstraint(["vendor_id"], ["vendors.id"]),
        sa.ForeignKeyConstraint(["purchase_order_id"], ["purchase_orders.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "trigger_type IN ('auto_schedule', 'inventory_change', 'manual')",
            name="ck_reorder_history_trigger_type",
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'po_created', 'po_approved', 'completed', 'failed')",
            name="ck_reorder_history_status",
        ),
        sa.CheckConstraint("reorder_quantity > 0", name="ck_reorder_history_quantity_positive"),
    )
    op.create_index("ix_reorder_history_id", "reorder_history", ["id"], unique=False)
    op.create_index("ix_reorder_history_sku_id", "reorder_history", ["sku_id"], unique=False)
    op.create_index("ix_reorder_history_vendor_id", "reorder_history", ["vendor_id"], unique=False)
    op.create_index("ix_reorder_history_purchase_order_id", "reorder_history", ["purchase_order_id"], unique=False)
    op.create_index("ix_reorder_history_sku_status", "reorder_history", ["sku_id", "status"], unique=False)
    op.create_index(
        "ix_reorder_history_status_trigger",
        "reorder_history",
        ["status", "trigger_timestamp"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_reorder_history_status_trigger", table_name="reorder_history")
    op.drop_index("ix_reorder_history_sku_status", table_name="reorder_history")
    op.drop_index("ix_reorder_history_purchase_order_id", table_name="reorder_history")
    op.drop_index("ix_reorder_history_vendor_id", table_name="reorder_history")
    op.drop_index("ix_reorder_history_sku_id", table_name="reorder_history")
    op.drop_index("ix_reorder_history_id", table_name="reorder_history")
    op.drop_table("reorder_history")
