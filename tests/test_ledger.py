from decimal import Decimal

import pytest

from partsflow.core.errors import DuplicateError, NotFoundError
from partsflow.schemas.category import CategoryCreate, CategoryUpdate
from partsflow.schemas.inventory import MovementCreate
from partsflow.schemas.part import PartCreate, PartUpdate, StockStatus
from partsflow.schemas.report import ReportCreate
from partsflow.schemas.supplier import SupplierCreate, SupplierUpdate


def _part(storage, **overrides):
    data = {
        "name": "Brake Pad Set Front",
        "part_number": "BP-F-002",
        "description": "Front brake pad set for heavy duty trucks",
        "quantity": 8,
        "minimum_stock": 12,
        "unit_price": Decimal("89.50"),
        "location": "B2-C3-D4",
    }
    data.update(overrides)
    return storage.create_part(PartCreate(**data))


def _move(storage, part_id: str, movement_type: str, quantity: int, reason: str | None = None):
    return storage.create_movement(
        MovementCreate(part_id=part_id, type=movement_type, quantity=quantity, reason=reason)
    )


def test_part_round_trip_keeps_fields(storage):
    created = _part(storage)

    fetched = storage.get_part(created.id)
    assert fetched is not None
    assert fetched.name == "Brake Pad Set Front"
    assert fetched.part_number == "BP-F-002"
    assert fetched.quantity == 8
    assert fetched.unit_price == Decimal("89.50")
    assert fetched.created_at == created.created_at
    assert fetched.stock_status is StockStatus.LOW_STOCK
    assert fetched.category is None
    assert fetched.supplier is None


def test_part_lookup_by_part_number(storage):
    created = _part(storage, part_number="HP-001")

    assert storage.get_part_by_part_number("HP-001").id == created.id
    assert storage.get_part_by_part_number("hp-001") is None


def test_duplicate_part_number_is_rejected(storage):
    first = _part(storage, part_number="AF-HD-001")
    other = _part(storage, part_number="OF-ENG-003")

    with pytest.raises(DuplicateError):
        _part(storage, part_number="AF-HD-001")
    with pytest.raises(DuplicateError):
        storage.update_part(other.id, PartUpdate(part_number="AF-HD-001"))

    # Re-saving a part's own number is not a conflict.
    updated = storage.update_part(first.id, PartUpdate(part_number="AF-HD-001", quantity=3))
    assert updated.quantity == 3
    assert len(storage.get_parts()) == 2


def test_update_part_applies_only_given_fields(storage):
    created = _part(storage)

    updated = storage.update_part(created.id, PartUpdate(location="Z9"))

    assert updated.location == "Z9"
    assert updated.name == created.name
    assert updated.quantity == created.quantity
    assert updated.updated_at > created.updated_at
    assert updated.created_at == created.created_at


def test_update_missing_entities_raises_not_found(storage):
    with pytest.raises(NotFoundError):
        storage.update_part("missing", PartUpdate(name="x"))
    with pytest.raises(NotFoundError):
        storage.update_supplier("missing", SupplierUpdate(name="x"))
    with pytest.raises(NotFoundError):
        storage.update_category("missing", CategoryUpdate(name="x"))


def test_delete_reports_whether_anything_was_removed(storage):
    part = _part(storage)

    assert storage.delete_part(part.id) is True
    assert storage.get_part(part.id) is None
    assert storage.delete_part(part.id) is False


def test_in_and_out_movements_adjust_quantity(storage):
    part = _part(storage, quantity=5, minimum_stock=2)

    _move(storage, part.id, "in", 7, "Delivery")
    assert storage.get_part(part.id).quantity == 12

    _move(storage, part.id, "out", 4)
    assert storage.get_part(part.id).quantity == 8


def test_out_movement_never_drives_stock_negative(storage):
    part = _part(storage, quantity=3, minimum_stock=1)

    movement = _move(storage, part.id, "out", 10, "Write-off")

    assert movement.quantity == 10
    refreshed = storage.get_part(part.id)
    assert refreshed.quantity == 0
    assert refreshed.stock_status is StockStatus.OUT_OF_STOCK


def test_movement_for_unknown_part_is_recorded_but_not_listed(storage):
    movement = _move(storage, "no-such-part", "in", 4)

    assert movement.part_id == "no-such-part"
    assert storage.get_movements() == []
    assert storage.get_movement(movement.id) is None
    assert storage.get_movements_by_part("no-such-part") == []


def test_movements_listed_newest_first_with_part(storage):
    part = _part(storage, quantity=10)
    other = _part(storage, part_number="HP-001", name="Hydraulic Pump", quantity=3)
    first = _move(storage, part.id, "out", 1)
    second = _move(storage, other.id, "in", 2)
    third = _move(storage, part.id, "out", 1)

    listed = storage.get_movements()
    assert [m.id for m in listed] == [third.id, second.id, first.id]
    assert listed[0].part.id == part.id
    assert listed[0].part.quantity == 8

    for_part = storage.get_movements_by_part(part.id)
    assert [m.id for m in for_part] == [third.id, first.id]

    assert storage.get_movement(second.id).part.name == "Hydraulic Pump"


def test_movements_of_deleted_part_drop_out_of_listings(storage):
    part = _part(storage)
    movement = _move(storage, part.id, "in", 1)

    storage.delete_part(part.id)

    assert storage.get_movements() == []
    assert storage.get_movement(movement.id) is None


def test_low_stock_includes_out_of_stock_parts(storage):
    _part(storage, part_number="A", quantity=25, minimum_stock=10)
    _part(storage, part_number="B", quantity=10, minimum_stock=10)
    _part(storage, part_number="C", quantity=0, minimum_stock=0)

    low = {p.part_number for p in storage.get_low_stock_parts()}

    assert low == {"B", "C"}


def test_inventory_stats(storage):
    storage.create_supplier(SupplierCreate(name="AutoParts Co."))
    storage.create_supplier(SupplierCreate(name="FuelTech Pro"))
    _part(storage, part_number="A", quantity=2, minimum_stock=5, unit_price=Decimal("10.50"))
    _part(storage, part_number="B", quantity=3, minimum_stock=1, unit_price=Decimal("5.00"))

    stats = storage.get_inventory_stats()

    assert stats.total_parts == 2
    assert stats.low_stock_count == 1
    assert stats.total_value == Decimal("36.00")
    assert stats.active_suppliers == 2


def test_inventory_stats_on_empty_store(storage):
    stats = storage.get_inventory_stats()

    assert stats.total_parts == 0
    assert stats.low_stock_count == 0
    assert stats.total_value == Decimal("0.00")
    assert stats.active_suppliers == 0


def test_deleted_category_and_supplier_resolve_to_nothing(storage):
    category = storage.create_category(CategoryCreate(name="Hydraulics"))
    supplier = storage.create_supplier(SupplierCreate(name="HydroSystems"))
    part = _part(storage, category_id=category.id, supplier_id=supplier.id)
    assert storage.get_part(part.id).category.name == "Hydraulics"

    storage.delete_category(category.id)
    storage.delete_supplier(supplier.id)

    refreshed = storage.get_part(part.id)
    assert refreshed.category_id == category.id
    assert refreshed.category is None
    assert refreshed.supplier is None


def test_category_names_are_unique(storage):
    engine_parts = storage.create_category(CategoryCreate(name="Engine Parts"))
    electrical = storage.create_category(CategoryCreate(name="Electrical"))

    with pytest.raises(DuplicateError):
        storage.create_category(CategoryCreate(name="Engine Parts"))
    with pytest.raises(DuplicateError):
        storage.update_category(electrical.id, CategoryUpdate(name="Engine Parts"))

    renamed = storage.update_category(engine_parts.id, CategoryUpdate(description="Blocks and heads"))
    assert renamed.name == "Engine Parts"
    assert renamed.description == "Blocks and heads"


def test_search_is_case_insensitive_over_name_number_and_description(storage):
    pad = _part(storage, name="Brake Pad Set Front", part_number="BP-F-002", description=None)
    pump = _part(
        storage,
        name="Main Pump",
        part_number="HP-001",
        description="Hydraulic pump for lifting systems",
        location="brake aisle",
    )

    assert [p.id for p in storage.search_parts("BRAKE")] == [pad.id]
    assert [p.id for p in storage.search_parts("hp-0")] == [pump.id]
    assert [p.id for p in storage.search_parts("LIFTING")] == [pump.id]
    assert storage.search_parts("gearbox") == []


def test_search_treats_wildcards_literally(storage):
    _part(storage, name="Filter 100% cotton", part_number="F-1")
    _part(storage, name="Filter paper", part_number="F-2")

    assert [p.part_number for p in storage.search_parts("100%")] == ["F-1"]
    assert storage.search_parts("_") == []


def test_reports_listed_newest_first(storage):
    first = storage.create_report(
        ReportCreate(name="September stock", type="inventory", date_range='{"from": "2026-09-01"}')
    )
    second = storage.create_report(
        ReportCreate(name="Low stock", type="low-stock", date_range={"to": "2026-09-30", "from": "2026-09-01"})
    )

    reports = storage.get_reports()

    assert [r.id for r in reports] == [second.id, first.id]
    assert reports[0].date_range == '{"from": "2026-09-01", "to": "2026-09-30"}'


def test_search_folds_non_ascii_case(storage):
    oil = _part(storage, name="Motoröl Filter", part_number="MF-1", description="Für Dieselmotoren")
    _part(storage, name="Air Filter", part_number="AF-1", description=None)

    assert [p.id for p in storage.search_parts("ÖL")] == [oil.id]
    assert [p.id for p in storage.search_parts("FÜR")] == [oil.id]
