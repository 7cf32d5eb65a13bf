from typing import Protocol

from partsflow.schemas.category import CategoryCreate, CategoryOut, CategoryUpdate
from partsflow.schemas.inventory import (
    InventoryStatsOut,
    MovementCreate,
    MovementOut,
    MovementWithPartOut,
)
from partsflow.schemas.part import PartCreate, PartOut, PartUpdate, PartWithDetailsOut
from partsflow.schemas.report import ReportCreate, ReportOut
from partsflow.schemas.supplier import SupplierCreate, SupplierOut, SupplierUpdate


class Storage(Protocol):
    """The inventory ledger.

    Owns suppliers, categories, parts, movements and reports. A part's
    quantity only changes through ``create_part``, ``update_part`` or the
    adjustment ``create_movement`` applies. Category and supplier references
    on a part are weak: they are resolved on read and never cascade.

    ``update_*`` raise ``NotFoundError`` for an unknown id; ``delete_*``
    return False instead. Uniqueness violations raise ``DuplicateError``.
    """

    name: str

    # Suppliers
    def get_suppliers(self) -> list[SupplierOut]:
        ...

    def get_supplier(self, supplier_id: str) -> SupplierOut | None:
        ...

    def create_supplier(self, data: SupplierCreate) -> SupplierOut:
        ...

    def update_supplier(self, supplier_id: str, data: SupplierUpdate) -> SupplierOut:
        ...

    def delete_supplier(self, supplier_id: str) -> bool:
        ...

    # Categories
    def get_categories(self) -> list[CategoryOut]:
        ...

    def get_category(self, category_id: str) -> CategoryOut | None:
        ...

    def create_category(self, data: CategoryCreate) -> CategoryOut:
        ...

    def update_category(self, category_id: str, data: CategoryUpdate) -> CategoryOut:
        ...

    def delete_category(self, category_id: str) -> bool:
        ...

    # Parts
    def get_parts(self) -> list[PartWithDetailsOut]:
        ...

    def get_part(self, part_id: str) -> PartWithDetailsOut | None:
        ...

    def get_part_by_part_number(self, part_number: str) -> PartWithDetailsOut | None:
        ...

    def create_part(self, data: PartCreate) -> PartOut:
        ...

    def update_part(self, part_id: str, data: PartUpdate) -> PartOut:
        ...

    def delete_part(self, part_id: str) -> bool:
        ...

    def search_parts(self, query: str) -> list[PartWithDetailsOut]:
        ...

    def get_low_stock_parts(self) -> list[PartWithDetailsOut]:
        ...

    # Movements
    def get_movements(self) -> list[MovementWithPartOut]:
        ...

    def get_movement(self, movement_id: str) -> MovementWithPartOut | None:
        ...

    def get_movements_by_part(self, part_id: str) -> list[MovementWithPartOut]:
        ...

    def create_movement(self, data: MovementCreate) -> MovementOut:
        ...

    # Stats
    def get_inventory_stats(self) -> InventoryStatsOut:
        ...

    # Reports
    def get_reports(self) -> list[ReportOut]:
        ...

    def create_report(self, data: ReportCreate) -> ReportOut:
        ...
