"""add purchase orders and purchase order items tables

Revision ID: 20261018_0003
Revises: 20261018_0002
Create Date: 2026-10-18 09:34:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261018_0003"
down_revision = "20261018_0002"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "purchase_orders",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("po_number", sa.String(length=50), nullable=False),
        sa.Column("vendor_id", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="draft"),
        sa.Column("total_amount", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("auto_generated", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("reorder_source", sa.String(length=20), nullable=False, server_default="manual"),
        sa.Column("reorder_trigger_type", sa.String(length=20), nullable=False, server_default="manual"),
        sa.Column("related_sku_ids", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(["vendor_id"], ["vendors.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("po_number"),
        sa.CheckConstraint(
            "status IN ('draft', 'submitted', 'approved', 'received', 'cancelled')",
            name="ck_purchase_orders_status",
        ),
        sa.CheckConstraint("reorder_source IN ('manual', 'auto_reorder')", name="ck_purchase_orders_source"),
        sa.CheckConstraint(
            "reorder_trigger_type IN ('auto_schedule', 'inventory_change', 'manual')",
            name="ck_purchase_orders_trigger_type",
        ),
        sa.CheckConstraint("total_amount >= 0", name="ck_purchase_orders_total_non_negative"),
    )
    op.create_index("ix_purchase_orders_id", "purchase_orders", ["id"], unique=False)
    op.create_index("ix_purchase_orders_vendor_id", "purchase_orders", ["vendor_id"], unique=False)
    op.create_index("ix_purchase_orders_vendor_status", "purchase_orders", ["vendor_id", "status"], unique=False)
    op.create_index("ix_purchase_orders_created_at", "purchase_orders", ["created_at"], unique=False)

    op.create_table(
        "purchase_order_items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("purchase_order_id", sa.Integer(), nullable=False),
        sa.Column("sku_id", sa.Integer(), nullable=False),
        sa.Column("quantity", sa.Numeric(12, 2), nullable=False),
        sa.Column("unit_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("total_price", sa.Numeric(14, 2), nullable=False),
        sa.ForeignKeyConstraint(["purchase_order_id"], ["purchase_orders.id"]),
        sa.ForeignKeyConstraint(["sku_id"], ["skus.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("quantity > 0", name="ck_purchase_order_items_quantity_positive"),
        sa.CheckConstraint("unit_price > 0", name="ck_purchase_order_items_unit_price_positive"),
    )
    op.create_index("ix_purchase_order_items_id", "purchase_order_items", ["id"], unique=False)
    op.create_index(
        "ix_purchase_order_items_purchase_order_id",
        "purchase_order_items",
        ["purchase_order_id"],
        unique=False,
    )
    op.create_index("ix_purchase_order_items_sku_id", "purchase_order_items", ["sku_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_purchase_order_items_sku_id", table_name="purchase_order_items")
    op.drop_index("ix_purchase_order_items_purchase_order_id", table_name="purchase_order_items")
    op.drop_index("ix_purchase_order_items_id", table_name="purchase_order_items")
    op.drop_table("purchase_order_items")
    op.drop_index("ix_purchase_orders_created_at", table_name="purchase_orders")
    op.drop_index("ix_purchase_orders_vendor_status", table_name="purchase_orders")
    op.drop_index("ix_purchase_orders_vendor_id", table_name="purchase_orders")
    op.drop_index("ix_purchase_orders_id", table_name="purchase_orders")
    op.drop_table("purchase_orders")
