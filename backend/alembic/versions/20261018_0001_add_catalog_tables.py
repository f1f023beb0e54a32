"""add vendors, stock classes and skus tables

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 09:12:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261018_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "vendors",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("code", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="active"),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
        sa.CheckConstraint("status IN ('active', 'inactive')", name="ck_vendors_status"),
    )
    op.create_index("ix_vendors_id", "vendors", ["id"], unique=False)

    op.create_table(
        "stock_classes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("stock_management_type", sa.String(length=20), nullable=False, server_default="overall"),
        sa.Column("overall_min_stock", sa.Numeric(12, 2), nullable=True),
        sa.Column("overall_max_stock", sa.Numeric(12, 2), nullable=True),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
        sa.CheckConstraint(
            "stock_management_type IN ('overall', 'monthly')",
            name="ck_stock_classes_management_type",
        ),
        sa.CheckConstraint("overall_min_stock IS NULL OR overall_min_stock >= 0", name="ck_stock_classes_min_non_negative"),
        sa.CheckConstraint("overall_max_stock IS NULL OR overall_max_stock >= 0", name="ck_stock_classes_max_non_negative"),
    )
    op.create_index("ix_stock_classes_id", "stock_classes", ["id"], unique=False)

    op.create_table(
        "class_monthly_stock_levels",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("class_id", sa.Integer(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("min_stock", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("max_stock", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.ForeignKeyConstraint(["class_id"], ["stock_classes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("class_id", "month", name="uq_class_monthly_stock_levels_class_month"),
        sa.CheckConstraint("month BETWEEN 1 AND 12", name="ck_class_monthly_stock_levels_month"),
        sa.CheckConstraint("min_stock >= 0", name="ck_class_monthly_stock_levels_min_non_negative"),
        sa.CheckConstraint("max_stock >= 0", name="ck_class_monthly_stock_levels_max_non_negative"),
    )
    op.create_index("ix_class_monthly_stock_levels_id", "class_monthly_stock_levels", ["id"], unique=False)
    op.create_index("ix_class_monthly_stock_levels_class_id", "class_monthly_stock_levels", ["class_id"], unique=False)

    op.create_table(
        "skus",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("sku_code", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("class_id", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="active"),
        sa.Column("auto_reorder_enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("preferred_vendor_id", sa.Integer(), nullable=True),
        sa.Column("cost_price", sa.Numeric(12, 2), nullable=True),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(["class_id"], ["stock_classes.id"]),
        sa.ForeignKeyConstraint(["preferred_vendor_id"], ["vendors.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("sku_code"),
        sa.CheckConstraint("status IN ('active', 'inactive', 'discontinued')", name="ck_skus_status"),
        sa.CheckConstraint("cost_price IS NULL OR cost_price >= 0", name="ck_skus_cost_price_non_negative"),
    )
    op.create_index("ix_skus_id", "skus", ["id"], unique=False)
    op.create_index("ix_skus_class_id", "skus", ["class_id"], unique=False)
    op.create_index("ix_skus_preferred_vendor_id", "skus", ["preferred_vendor_id"], unique=False)
    op.create_index("ix_skus_auto_reorder", "skus", ["status", "auto_reorder_enabled"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_skus_auto_reorder", table_name="skus")
    op.drop_index("ix_skus_preferred_vendor_id", table_name="skus")
    op.drop_index("ix_skus_class_id", table_name="skus")
    op.drop_index("ix_skus_id", table_name="skus")
    op.drop_table("skus")
    op.drop_index("ix_class_monthly_stock_levels_class_id", table_name="class_monthly_stock_levels")
    op.drop_index("ix_class_monthly_stock_levels_id", table_name="class_monthly_stock_levels")
    op.drop_table("class_monthly_stock_levels")
    op.drop_index("ix_stock_classes_id", table_name="stock_classes")
    op.drop_table("stock_classes")
    op.drop_index("ix_vendors_id", table_name="vendors")
    op.drop_table("vendors")
