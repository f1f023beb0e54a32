from typing import Dict, Iterable, List

from autoreorder.services.eligibility_service import EligibleItem


def group_by_vendor(items: Iterable[EligibleItem]) -> Dict[int, List[EligibleItem]]:
    """One batch per preferred vendor; scan order is kept inside each batch."""
    groups: Dict[int, List[EligibleItem]] = {}
    for item in items:
        groups.setdefault(item.vendor_id, []).append(item)
    return groups
