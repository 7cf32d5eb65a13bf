from partsflow.schemas.supplier import SupplierCreate
from partsflow.services.seed_service import DEFAULT_CATEGORIES, DEFAULT_SUPPLIERS, SAMPLE_PARTS, seed_sample_data


def test_seed_loads_catalogue_into_empty_store(storage):
    assert seed_sample_data(storage) is True

    assert len(storage.get_categories()) == len(DEFAULT_CATEGORIES)
    assert len(storage.get_suppliers()) == len(DEFAULT_SUPPLIERS)
    parts = storage.get_parts()
    assert len(parts) == len(SAMPLE_PARTS)
    assert all(part.category is not None and part.supplier is not None for part in parts)

    stats = storage.get_inventory_stats()
    assert stats.low_stock_count == 3
    assert str(stats.total_value) == "3215.75"


def test_seed_is_skipped_when_store_has_data(storage):
    storage.create_supplier(SupplierCreate(name="Existing Supplier"))

    assert seed_sample_data(storage) is False
    assert storage.get_parts() == []
    assert len(storage.get_suppliers()) == 1
