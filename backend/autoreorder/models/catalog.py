from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from autoreorder.database import Base


class Vendor(Base):
    __tablename__ = "vendors"
    __table_args__ = (
        CheckConstraint("status IN ('active', 'inactive')", name="ck_vendors_status"),
    )

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), nullable=False, unique=True)
    name = Column(String(200), nullable=False)
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(DateTime, default=func.now())


class StockClass(Base):
    """Catalog class carrying the stock-management thresholds of its SKUs."""

    __tablename__ = "stock_classes"
    __table_args__ = (
        CheckConstraint(
            "stock_management_type IN ('overall', 'monthly')",
            name="ck_stock_classes_management_type",
        ),
        CheckConstraint("overall_min_stock IS NULL OR overall_min_stock >= 0", name="ck_stock_classes_min_non_negative"),
        CheckConstraint("overall_max_stock IS NULL OR overall_max_stock >= 0", name="ck_stock_classes_max_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, unique=True)
    stock_management_type = Column(String(20), nullable=False, default="overall")
    overall_min_stock = Column(Numeric(12, 2), nullable=True)
    overall_max_stock = Column(Numeric(12, 2), nullable=True)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    monthly_stock_levels = relationship(
        "ClassMonthlyStockLevel",
        back_populates="stock_class",
        cascade="all, delete-orphan",
        order_by="ClassMonthlyStockLevel.month",
    )


class ClassMonthlyStockLevel(Base):
    __tablename__ = "class_monthly_stock_levels"
    __table_args__ = (
        UniqueConstraint("class_id", "month", name="uq_class_monthly_stock_levels_class_month"),
        CheckConstraint("month BETWEEN 1 AND 12", name="ck_class_monthly_stock_levels_month"),
        CheckConstraint("min_stock >= 0", name="ck_class_monthly_stock_levels_min_non_negative"),
        CheckConstraint("max_stock >= 0", name="ck_class_monthly_stock_levels_max_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    class_id = Column(Integer, ForeignKey("stock_classes.id", ondelete="CASCADE"), nullable=False, index=True)
    month = Column(Integer, nullable=False)
    min_stock = Column(Numeric(12, 2), nullable=False, default=0)
    max_stock = Column(Numeric(12, 2), nullable=False, default=0)

    stock_class = relationship("StockClass", back_populates="monthly_stock_levels")


class Sku(Base):
    __tablename__ = "skus"
    __table_args__ = (
        CheckConstraint("status IN ('active', 'inactive', 'discontinued')", name="ck_skus_status"),
        CheckConstraint("cost_price IS NULL OR cost_price >= 0", name="ck_skus_cost_price_non_negative"),
        Index("ix_skus_auto_reorder", "status", "auto_reorder_enabled"),
    )

    id = Column(Integer, primary_key=True, index=True)
    sku_code = Column(String(100), nullable=False, unique=True)
    description = Column(String(500), nullable=True)
    class_id = Column(Integer, ForeignKey("stock_classes.id"), nullable=True, index=True)
    status = Column(String(20), nullable=False, default="active")
    auto_reorder_enabled = Column(Boolean, nullable=False, default=False)
    preferred_vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=True, index=True)
    cost_price = Column(Numeric(12, 2), nullable=True)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    stock_class = relationship("StockClass")
    preferred_vendor = relationship("Vendor")
