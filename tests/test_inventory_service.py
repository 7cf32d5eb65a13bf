from datetime import datetime, timezone
from decimal import Decimal

import pytest

from partsflow.schemas.category import CategoryOut
from partsflow.schemas.part import PartOut, PartWithDetailsOut, StockStatus
from partsflow.schemas.supplier import SupplierOut
from partsflow.services.dashboard_service import summarize_inventory
from partsflow.services.inventory_service import (
    apply_movement,
    compute_stock_status,
    is_low_stock,
    movement_delta,
)
from partsflow.services.part_filter import filter_parts

NOW = datetime(2026, 10, 18, tzinfo=timezone.utc)


def _part(**overrides) -> PartOut:
    data = {
        "id": "p1",
        "name": "Air Filter Heavy Duty",
        "part_number": "AF-HD-001",
        "quantity": 25,
        "minimum_stock": 10,
        "unit_price": Decimal("45.99"),
        "created_at": NOW,
        "updated_at": NOW,
    }
    data.update(overrides)
    return PartOut(**data)


def _detailed(category: str | None = None, supplier: str | None = None, **overrides) -> PartWithDetailsOut:
    part = _part(**overrides)
    return PartWithDetailsOut(
        **part.model_dump(),
        category=CategoryOut(id="c1", name=category) if category else None,
        supplier=SupplierOut(id="s1", name=supplier) if supplier else None,
        stock_status=compute_stock_status(part.quantity, part.minimum_stock),
    )


@pytest.mark.parametrize(
    ("quantity", "minimum_stock", "expected"),
    [
        (0, 0, StockStatus.OUT_OF_STOCK),
        (0, 5, StockStatus.OUT_OF_STOCK),
        (5, 5, StockStatus.LOW_STOCK),
        (4, 5, StockStatus.LOW_STOCK),
        (6, 5, StockStatus.IN_STOCK),
        (1, 0, StockStatus.IN_STOCK),
    ],
)
def test_compute_stock_status(quantity, minimum_stock, expected):
    assert compute_stock_status(quantity, minimum_stock) is expected


def test_low_stock_counts_out_of_stock():
    assert is_low_stock(0, 0) is True
    assert is_low_stock(3, 3) is True
    assert is_low_stock(4, 3) is False


def test_movement_delta_signs():
    assert movement_delta("in", 4) == 4
    assert movement_delta("out", 4) == -4
    assert movement_delta("adjust", 4) == 0


def test_apply_movement_clamps_at_zero():
    assert apply_movement(3, "out", 10) == 0
    assert apply_movement(3, "in", 10) == 13
    assert apply_movement(3, "unknown", 10) == 3


def test_summarize_inventory_uses_exact_decimal_totals():
    parts = [
        _part(id="a", quantity=3, unit_price=Decimal("0.10")),
        _part(id="b", quantity=0, minimum_stock=0, unit_price=Decimal("999.99")),
        _part(id="c", quantity=7, minimum_stock=2, unit_price=Decimal("0.20")),
    ]

    stats = summarize_inventory(parts, supplier_count=4)

    assert stats.total_parts == 3
    assert stats.low_stock_count == 2
    assert stats.total_value == Decimal("1.70")
    assert stats.active_suppliers == 4
    assert stats.model_dump(mode="json", by_alias=True)["totalValue"] == "1.70"


def test_filter_parts_matches_related_names_and_status():
    pump = _detailed(
        id="p-pump",
        name="Hydraulic Pump",
        part_number="HP-001",
        category="Hydraulics",
        supplier="HydroSystems",
        location="C1-A2-B3",
        quantity=3,
        minimum_stock=5,
    )
    filt = _detailed(id="p-filter", location=None)

    parts = [pump, filt]

    assert filter_parts(parts, "hydrosys") == [pump]
    assert filter_parts(parts, "c1-a2") == [pump]
    assert filter_parts(parts, "LOW-STOCK") == [pump]
    assert filter_parts(parts, "in-stock") == [filt]
    assert filter_parts(parts, "p-filter") == [filt]
    assert filter_parts(parts, "nothing-here") == []


def test_filter_parts_without_search_returns_everything():
    parts = [_detailed(id="a"), _detailed(id="b")]

    assert filter_parts(parts, None) == parts
    assert filter_parts(parts, "") == parts
    assert filter_parts(parts, "") is not parts
