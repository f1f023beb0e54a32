from decimal import Decimal
from types import SimpleNamespace

import pytest

from autoreorder.services.threshold_resolver import (
    NO_THRESHOLDS,
    resolve_thresholds,
    severity_label,
)


def _overall(lo, hi):
    return SimpleNamespace(
        id=1,
        stock_management_type="overall",
        overall_min_stock=lo,
        overall_max_stock=hi,
        monthly_stock_levels=[],
    )


def _monthly(levels):
    return SimpleNamespace(
        id=2,
        stock_management_type="monthly",
        overall_min_stock=None,
        overall_max_stock=None,
        monthly_stock_levels=[
            SimpleNamespace(month=m, min_stock=lo, max_stock=hi) for m, (lo, hi) in levels.items()
        ],
    )


def test_overall_mode_ignores_month():
    stock_class = _overall(Decimal("10"), Decimal("50"))

    for month in (1, 6, 12):
        thresholds = resolve_thresholds(stock_class, month)
        assert thresholds.min_threshold == Decimal("10")
        assert thresholds.optimal_threshold == Decimal("50")
        assert thresholds.source == "overall"


def test_overall_mode_with_missing_values_resolves_to_zero():
    thresholds = resolve_thresholds(_overall(None, None), 3)

    assert thresholds.min_threshold == 0
    assert thresholds.optimal_threshold == 0
    assert not thresholds.is_configured


def test_monthly_mode_picks_row_for_current_month():
    stock_class = _monthly({3: (Decimal("5"), Decimal("15")), 10: (Decimal("20"), Decimal("40"))})

    thresholds = resolve_thresholds(stock_class, 10)

    assert (thresholds.min_threshold, thresholds.optimal_threshold) == (Decimal("20"), Decimal("40"))
    assert thresholds.source == "monthly"


def test_monthly_mode_without_row_for_month_resolves_to_zero():
    stock_class = _monthly({3: (Decimal("5"), Decimal("15"))})

    thresholds = resolve_thresholds(stock_class, 4)

    assert thresholds.min_threshold == 0
    assert thresholds.optimal_threshold == 0
    assert thresholds.source == "monthly"


def test_sku_without_class_has_no_thresholds():
    assert resolve_thresholds(None, 5) == NO_THRESHOLDS


def test_unknown_management_type_is_logged_and_treated_as_unconfigured(caplog):
    stock_class = _overall(Decimal("10"), Decimal("50"))
    stock_class.stock_management_type = "weekly"

    with caplog.at_level("WARNING"):
        thresholds = resolve_thresholds(stock_class, 5)

    assert thresholds == NO_THRESHOLDS
    assert "threshold_config_invalid" in caplog.text


@pytest.mark.parametrize("month", [0, 13])
def test_month_out_of_range_is_rejected(month):
    with pytest.raises(ValueError):
        resolve_thresholds(_overall(Decimal("1"), Decimal("2")), month)


def test_severity_label_boundary_is_half_the_minimum():
    assert severity_label(Decimal("5"), Decimal("10")) == "Critical"
    assert severity_label(Decimal("0"), Decimal("10")) == "Critical"
    assert severity_label(Decimal("6"), Decimal("10")) == "Low"
    assert severity_label(Decimal("6"), Decimal("10"), critical_ratio=0.6) == "Critical"
