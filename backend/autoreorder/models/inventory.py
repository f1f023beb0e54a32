from sqlalchemy import (
    Column,
    Integer,
    String,
    Numeric,
    DateTime,
    ForeignKey,
    CheckConstraint,
    UniqueConstraint,
    func,
)
from autoreorder.database import Base


class WarehouseInventory(Base):
    """Inventory ledger row; the reorder engine only ever reads it."""

    __tablename__ = "warehouse_inventory"
    __table_args__ = (
        UniqueConstraint("sku_id", "warehouse_code", name="uq_warehouse_inventory_sku_warehouse"),
        CheckConstraint("total_quantity >= 0", name="ck_warehouse_inventory_total_non_negative"),
        CheckConstraint("reserved_quantity >= 0", name="ck_warehouse_inventory_reserved_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    sku_id = Column(Integer, ForeignKey("skus.id"), nullable=False, index=True)
    warehouse_code = Column(String(50), nullable=False, default="MAIN")
    total_quantity = Column(Numeric(12, 2), nullable=False, default=0)
    reserved_quantity = Column(Numeric(12, 2), nullable=False, default=0)
    available_quantity = Column(Numeric(12, 2), nullable=False, default=0)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
