"""
Threshold Resolver

Maps a class's stock-management configuration and a calendar month to the
(minimum, optimal) stock levels that apply. Missing or unusable configuration
resolves to zero thresholds, which the scanner reads as "do not reorder".
"""
import logging
from decimal import Decimal
from typing import Any, NamedTuple, Optional


logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class Thresholds(NamedTuple):
    min_threshold: Decimal
    optimal_threshold: Decimal
    source: str

    @property
    def is_configured(self) -> bool:
        return self.min_threshold > 0


NO_THRESHOLDS = Thresholds(ZERO, ZERO, "none")


def _as_decimal(value: Any) -> Decimal:
    if value is None:
        return ZERO
    return Decimal(str(value))


def resolve_thresholds(stock_class: Optional[Any], current_month: int) -> Thresholds:
    """
    ``stock_class`` is any object exposing ``stock_management_type``,
    ``overall_min_stock``, ``overall_max_stock`` and ``monthly_stock_levels``
    (rows with ``month``, ``min_stock``, ``max_stock``).
    """
    if not 1 <= current_month <= 12:
        raise ValueError(f"current_month must be 1..12, got {current_month}")

    if stock_class is None:
        return NO_THRESHOLDS

    mode = stock_class.stock_management_type
    if mode == "overall":
        return Thresholds(
            _as_decimal(stock_class.overall_min_stock),
            _as_decimal(stock_class.overall_max_stock),
            "overall",
        )

    if mode == "monthly":
        for level in stock_class.monthly_stock_levels or []:
            if level.month == current_month:
                return Thresholds(_as_decimal(level.min_stock), _as_decimal(level.max_stock), "monthly")
        return Thresholds(ZERO, ZERO, "monthly")

    logger.warning(
        "threshold_config_invalid class_id=%s mode=%r",
        getattr(stock_class, "id", None),
        mode,
    )
    return NO_THRESHOLDS


def severity_label(available: Decimal, min_threshold: Decimal, critical_ratio: float = 0.5) -> str:
    if available <= min_threshold * Decimal(str(critical_ratio)):
        return "Critical"
    return "Low"
