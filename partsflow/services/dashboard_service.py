from collections.abc import Iterable

from partsflow.core.money import line_value, sum_money
from partsflow.schemas.inventory import InventoryStatsOut
from partsflow.schemas.part import PartOut
from partsflow.services.inventory_service import is_low_stock


def summarize_inventory(parts: Iterable[PartOut], supplier_count: int) -> InventoryStatsOut:
    """Aggregate figures for the dashboard, computed from the parts as they are now.

    ``activeSuppliers`` is the total number of suppliers on file; no activity
    filter is applied.
    """
    part_list = list(parts)
    return InventoryStatsOut(
        total_parts=len(part_list),
        low_stock_count=sum(1 for p in part_list if is_low_stock(p.quantity, p.minimum_stock)),
        total_value=sum_money(line_value(p.quantity, p.unit_price) for p in part_list),
        active_suppliers=supplier_count,
    )
