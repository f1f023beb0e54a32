from sqlalchemy import (
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

from autoreorder.database import Base


REORDER_TRIGGER_TYPES = ("auto_schedule", "inventory_change", "manual")
REORDER_STATUSES = ("pending", "po_created", "po_approved", "completed", "failed")
# Statuses that block a new reorder for the same SKU.
OPEN_REORDER_STATUSES = ("pending", "po_created")


class ReorderHistory(Base):
    """
    One row per reorder attempt.

    Inventory level and thresholds are the values observed when the decision
    was made and are never recomputed afterwards.
    """

    __tablename__ = "reorder_history"
    __table_args__ = (
        CheckConstraint(
            "trigger_type IN ('auto_schedule', 'inventory_change', 'manual')",
            name="ck_reorder_history_trigger_type",
        ),
        CheckConstraint(
            "status IN ('pending', 'po_created', 'po_approved', 'completed', 'failed')",
            name="ck_reorder_history_status",
        ),
        CheckConstraint("reorder_quantity > 0", name="ck_reorder_history_quantity_positive"),
        Index("ix_reorder_history_sku_status", "sku_id", "status"),
        Index("ix_reorder_history_status_trigger", "status", "trigger_timestamp"),
    )

    id = Column(Integer, primary_key=True, index=True)
    sku_id = Column(Integer, ForeignKey("skus.id"), nullable=False, index=True)
    trigger_type = Column(String(20), nullable=False)
    trigger_timestamp = Column(DateTime, default=func.now(), nullable=False)
    inventory_level = Column(Numeric(12, 2), nullable=False)
    min_threshold = Column(Numeric(12, 2), nullable=False)
    optimal_threshold = Column(Numeric(12, 2), nullable=False)
    reorder_quantity = Column(Numeric(12, 2), nullable=False)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=True, index=True)
    purchase_order_id = Column(Integer, ForeignKey("purchase_orders.id"), nullable=True, index=True)
    status = Column(String(20), nullable=False, default="pending")
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
