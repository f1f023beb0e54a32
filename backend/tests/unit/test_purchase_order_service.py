from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import SQLAlchemyError

from autoreorder.core.exceptions import (
    ConfigurationException,
    PricingException,
    PurchaseOrderWriteException,
)
from autoreorder.models import PurchaseOrder, PurchaseOrderItem
from autoreorder.repositories.purchase_order_repository import PurchaseOrderRepository
from autoreorder.services.eligibility_service import EligibilityScanner, EligibleItem
from autoreorder.services.purchase_order_service import (
    NO_ITEMS_ERROR,
    PurchaseOrderMaterializer,
    resolve_unit_price,
)


AS_OF = date(2026, 10, 18)


def _existing_po(db, vendor, po_number: str) -> PurchaseOrder:
    po = PurchaseOrder(po_number=po_number, vendor_id=vendor.id, total_amount=0, related_sku_ids=[])
    db.add(po)
    db.commit()
    return po


def _fail_add_items(self, items):
    raise SQLAlchemyError("disk I/O error")


class TestPoNumber:
    def test_first_po_number(self, db):
        assert PurchaseOrderMaterializer(db).next_po_number() == "PO-0001"

    def test_increments_latest_number(self, db, seed):
        vendor = seed.vendor()
        _existing_po(db, vendor, "PO-0041")

        assert PurchaseOrderMaterializer(db).next_po_number() == "PO-0042"

    def test_latest_is_taken_by_creation_order(self, db, seed):
        vendor = seed.vendor()
        _existing_po(db, vendor, "PO-0100")
        _existing_po(db, vendor, "PO-0007")

        assert PurchaseOrderMaterializer(db).next_po_number() == "PO-0008"

    def test_width_grows_past_padding(self, db, seed):
        _existing_po(db, seed.vendor(), "PO-9999")

        assert PurchaseOrderMaterializer(db).next_po_number() == "PO-10000"

    def test_unparseable_number_falls_back_to_epoch_millis(self, db, seed, monkeypatch):
        _existing_po(db, seed.vendor(), "LEGACY-A")
        monkeypatch.setattr("autoreorder.services.purchase_order_service.time.time", lambda: 1760000000.5)

        assert PurchaseOrderMaterializer(db).next_po_number() == "PO-1760000000500"


def test_resolve_unit_price_rejects_missing_and_zero_prices():
    item = EligibleItem(1, "SKU-1", 1, Decimal("0"), Decimal("5"), Decimal("10"), "Critical")

    assert resolve_unit_price(item, Decimal("12.5")) == Decimal("12.50")
    for price in (None, Decimal("0")):
        with pytest.raises(PricingException, match="cost price not found"):
            resolve_unit_price(item, price)


def test_materialize_writes_draft_po_with_one_line_per_item(db, seed):
    vendor = seed.vendor()
    stock_class = seed.overall_class(5, 10)
    first = seed.sku(stock_class, vendor, available=3, cost_price="10.00")
    second = seed.sku(stock_class, vendor, available=0, cost_price="2.50")
    items = EligibilityScanner(db).scan(AS_OF)

    result = PurchaseOrderMaterializer(db).materialize(vendor.id, items, "auto_schedule")

    assert result.success
    assert result.po_number == "PO-0001"
    assert result.total_amount == Decimal("95.00")

    po = db.get(PurchaseOrder, result.po_id)
    assert po.status == "draft"
    assert po.vendor_id == vendor.id
    assert po.auto_generated is True
    assert po.reorder_source == "auto_reorder"
    assert po.reorder_trigger_type == "auto_schedule"
    assert po.related_sku_ids == [first.id, second.id]
    assert po.total_amount == Decimal("95.00")

    lines = {line.sku_id: line for line in po.items}
    assert lines[first.id].quantity == Decimal("7")
    assert lines[first.id].unit_price == Decimal("10.00")
    assert lines[first.id].total_price == Decimal("70.00")
    assert lines[second.id].quantity == Decimal("10")
    assert lines[second.id].total_price == Decimal("25.00")


def test_item_without_cost_price_is_rejected_alone(db, seed):
    vendor = seed.vendor()
    stock_class = seed.overall_class(5, 10)
    priced = seed.sku(stock_class, vendor, available=3)
    unpriced = seed.sku(stock_class, vendor, available=3, cost_price=None)
    items = EligibilityScanner(db).scan(AS_OF)

    result = PurchaseOrderMaterializer(db).materialize(vendor.id, items, "auto_schedule")

    assert result.success
    assert [i.sku_id for i in result.ordered] == [priced.id]
    assert [r.item.sku_id for r in result.rejected] == [unpriced.id]
    assert result.rejected[0].reason == f"SKU {unpriced.sku_code}: cost price not found"
    assert db.get(PurchaseOrder, result.po_id).related_sku_ids == [priced.id]


def test_all_items_rejected_writes_nothing(db, seed):
    vendor = seed.vendor()
    seed.sku(seed.overall_class(5, 10), vendor, available=3, cost_price=None)
    items = EligibilityScanner(db).scan(AS_OF)

    result = PurchaseOrderMaterializer(db).materialize(vendor.id, items, "auto_schedule")

    assert not result.success
    assert result.error == NO_ITEMS_ERROR
    assert db.query(PurchaseOrder).count() == 0


def test_non_positive_quantity_is_a_caller_error(db, seed):
    vendor = seed.vendor()
    item = EligibleItem(1, "SKU-1", vendor.id, Decimal("12"), Decimal("15"), Decimal("10"), "Low")

    with pytest.raises(ValueError, match="must be positive"):
        PurchaseOrderMaterializer(db).materialize(vendor.id, [item], "auto_schedule")


def test_transactional_write_failure_leaves_no_header(db, seed, monkeypatch):
    vendor = seed.vendor()
    seed.sku(seed.overall_class(5, 10), vendor, available=3)
    items = EligibilityScanner(db).scan(AS_OF)
    monkeypatch.setattr(PurchaseOrderRepository, "add_items", _fail_add_items)

    result = PurchaseOrderMaterializer(db, write_mode="transaction").materialize(vendor.id, items, "auto_schedule")

    assert not result.success
    assert result.po_id is None
    assert result.error.startswith("Failed to create purchase order:")
    assert db.query(PurchaseOrder).count() == 0
    assert db.query(PurchaseOrderItem).count() == 0


def test_compensating_write_deletes_header_when_lines_fail(db, seed, monkeypatch):
    vendor = seed.vendor()
    seed.sku(seed.overall_class(5, 10), vendor, available=3)
    items = EligibilityScanner(db).scan(AS_OF)
    monkeypatch.setattr(PurchaseOrderRepository, "add_items", _fail_add_items)

    result = PurchaseOrderMaterializer(db, write_mode="compensating").materialize(vendor.id, items, "auto_schedule")

    assert not result.success
    assert result.error.startswith("Failed to create purchase order items:")
    assert "disk I/O error" in result.error
    assert db.query(PurchaseOrder).count() == 0


def test_compensating_write_success(db, seed):
    vendor = seed.vendor()
    seed.sku(seed.overall_class(5, 10), vendor, available=3)
    items = EligibilityScanner(db).scan(AS_OF)

    result = PurchaseOrderMaterializer(db, write_mode="compensating").materialize(vendor.id, items, "manual")

    assert result.success
    po = PurchaseOrderMaterializer(db).get_purchase_order(result.po_id)
    assert po.reorder_trigger_type == "manual"
    assert len(po.items) == 1


def test_unknown_write_mode_is_a_configuration_error(db):
    with pytest.raises(ConfigurationException, match="Unknown PO write mode 'eventual'"):
        PurchaseOrderMaterializer(db, write_mode="eventual")


def test_compensating_write_raises_with_deleted_header_id(db, seed, monkeypatch):
    vendor = seed.vendor()
    header = PurchaseOrder(po_number="PO-0001", vendor_id=vendor.id, total_amount=0, related_sku_ids=[])
    monkeypatch.setattr(PurchaseOrderRepository, "add_items", _fail_add_items)

    with pytest.raises(PurchaseOrderWriteException) as exc_info:
        PurchaseOrderMaterializer(db, write_mode="compensating")._write_compensating(header, [])

    assert exc_info.value.message.startswith("Failed to create purchase order items:")
    assert exc_info.value.details["po_id"] is not None
    assert db.query(PurchaseOrder).count() == 0
