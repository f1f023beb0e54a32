from decimal import Decimal

from autoreorder.services.eligibility_service import EligibleItem
from autoreorder.services.vendor_batcher import group_by_vendor


def _item(sku_id: int, vendor_id: int) -> EligibleItem:
    return EligibleItem(
        sku_id=sku_id,
        sku_code=f"SKU-{sku_id}",
        vendor_id=vendor_id,
        available=Decimal("1"),
        min_threshold=Decimal("5"),
        optimal_threshold=Decimal("10"),
        status_label="Critical",
    )


def test_group_by_vendor_keeps_scan_order_within_each_group():
    items = [_item(1, 7), _item(2, 3), _item(3, 7), _item(4, 3), _item(5, 9)]

    groups = group_by_vendor(items)

    assert list(groups) == [7, 3, 9]
    assert [i.sku_id for i in groups[7]] == [1, 3]
    assert [i.sku_id for i in groups[3]] == [2, 4]
    assert [i.sku_id for i in groups[9]] == [5]


def test_group_by_vendor_partitions_every_item_exactly_once():
    items = [_item(n, n % 4) for n in range(1, 21)]

    groups = group_by_vendor(items)

    flattened = sorted(i.sku_id for group in groups.values() for i in group)
    assert flattened == list(range(1, 21))
    for vendor_id, group in groups.items():
        assert all(i.vendor_id == vendor_id for i in group)


def test_group_by_vendor_on_empty_input():
    assert group_by_vendor([]) == {}
