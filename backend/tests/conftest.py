"""
Shared pytest fixtures.

Each test gets its own in-memory SQLite database; the FastAPI client shares
the test's session through a ``get_db`` override.
"""
from decimal import Decimal
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import autoreorder.models  # noqa: F401  (registers mappers)
from autoreorder.config import settings
from autoreorder.database import Base, get_db
from autoreorder.main import app
from autoreorder.models import (
    ClassMonthlyStockLevel,
    Sku,
    StockClass,
    Vendor,
    WarehouseInventory,
)
from autoreorder.utils.events import configure_event_bus
from autoreorder.utils.security import create_access_token


SCHEDULER_TOKEN = "test-scheduler-token-0123456789abcdef"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, autocommit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def event_bus():
    return configure_event_bus()


@pytest.fixture
def client(db):
    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _headers(roles: List[str]) -> dict:
    token = create_access_token(subject="tester@example.com", roles=roles)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    return _headers(["admin"])


@pytest.fixture
def viewer_headers():
    return _headers(["viewer"])


@pytest.fixture
def scheduler_headers(monkeypatch):
    monkeypatch.setattr(settings, "REORDER_SCHEDULER_TOKEN", SCHEDULER_TOKEN)
    return {"Authorization": f"Bearer {SCHEDULER_TOKEN}"}


class CatalogSeeder:
    """Small factory for catalog and stock rows."""

    def __init__(self, db):
        self.db = db
        self._counter = 0

    def _next(self) -> int:
        self._counter += 1
        return self._counter

    def vendor(self, code: Optional[str] = None) -> Vendor:
        n = self._next()
        vendor = Vendor(code=code or f"V-{n:03d}", name=f"Vendor {n}")
        self.db.add(vendor)
        self.db.commit()
        return vendor

    def overall_class(self, min_stock, max_stock) -> StockClass:
        stock_class = StockClass(
            name=f"Overall {self._next()}",
            stock_management_type="overall",
            overall_min_stock=min_stock,
            overall_max_stock=max_stock,
        )
        self.db.add(stock_class)
        self.db.commit()
        return stock_class

    def monthly_class(self, levels: dict) -> StockClass:
        """``levels`` maps month -> (min, max)."""
        stock_class = StockClass(name=f"Monthly {self._next()}", stock_management_type="monthly")
        stock_class.monthly_stock_levels = [
            ClassMonthlyStockLevel(month=month, min_stock=lo, max_stock=hi)
            for month, (lo, hi) in levels.items()
        ]
        self.db.add(stock_class)
        self.db.commit()
        return stock_class

    def sku(
        self,
        stock_class: Optional[StockClass],
        vendor: Optional[Vendor],
        available=None,
        cost_price="10.00",
        auto_reorder: bool = True,
        status: str = "active",
        code: Optional[str] = None,
    ) -> Sku:
        sku = Sku(
            sku_code=code or f"SKU-{self._next():04d}",
            class_id=stock_class.id if stock_class else None,
            status=status,
            auto_reorder_enabled=auto_reorder,
            preferred_vendor_id=vendor.id if vendor else None,
            cost_price=Decimal(cost_price) if cost_price is not None else None,
        )
        self.db.add(sku)
        self.db.commit()
        if available is not None:
            self.stock(sku, available)
        return sku

    def stock(self, sku: Sku, available, warehouse_code: str = "MAIN") -> WarehouseInventory:
        row = WarehouseInventory(
            sku_id=sku.id,
            warehouse_code=warehouse_code,
            total_quantity=available,
            reserved_quantity=0,
            available_quantity=available,
        )
        self.db.add(row)
        self.db.commit()
        return row


@pytest.fixture
def seed(db) -> CatalogSeeder:
    return CatalogSeeder(db)
