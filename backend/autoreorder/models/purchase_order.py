from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from autoreorder.database import Base


class PurchaseOrder(Base):
    __tablename__ = "purchase_orders"
    __table_args__ = (
        CheckConstraint(
            "status IN ('draft', 'submitted', 'approved', 'received', 'cancelled')",
            name="ck_purchase_orders_status",
        ),
        CheckConstraint("reorder_source IN ('manual', 'auto_reorder')", name="ck_purchase_orders_source"),
        CheckConstraint(
            "reorder_trigger_type IN ('auto_schedule', 'inventory_change', 'manual')",
            name="ck_purchase_orders_trigger_type",
        ),
        CheckConstraint("total_amount >= 0", name="ck_purchase_orders_total_non_negative"),
        Index("ix_purchase_orders_vendor_status", "vendor_id", "status"),
        Index("ix_purchase_orders_created_at", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    po_number = Column(String(50), nullable=False, unique=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="draft")
    total_amount = Column(Numeric(14, 2), nullable=False, default=0)
    notes = Column(Text, nullable=True)
    auto_generated = Column(Boolean, nullable=False, default=False)
    reorder_source = Column(String(20), nullable=False, default="manual")
    reorder_trigger_type = Column(String(20), nullable=False, default="manual")
    related_sku_ids = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    items = relationship("PurchaseOrderItem", back_populates="purchase_order", order_by="PurchaseOrderItem.id")


class PurchaseOrderItem(Base):
    __tablename__ = "purchase_order_items"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_purchase_order_items_quantity_positive"),
        CheckConstraint("unit_price > 0", name="ck_purchase_order_items_unit_price_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    purchase_order_id = Column(Integer, ForeignKey("purchase_orders.id"), nullable=False, index=True)
    sku_id = Column(Integer, ForeignKey("skus.id"), nullable=False, index=True)
    quantity = Column(Numeric(12, 2), nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)
    total_price = Column(Numeric(14, 2), nullable=False)

    purchase_order = relationship("PurchaseOrder", back_populates="items")
