from collections.abc import Callable, Iterable
from contextlib import contextmanager, nullcontext
from datetime import datetime
from threading import Lock, RLock
from typing import Iterator, TypeVar

from partsflow.core.errors import DuplicateError, NotFoundError
from partsflow.core.id_utils import generate_shortuuid, utcnow
from partsflow.core.observability import log_event
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
from partsflow.services.dashboard_service import summarize_inventory
from partsflow.services.inventory_service import (
    apply_movement,
    compute_stock_status,
    is_low_stock,
)
from partsflow.services.part_filter import matches_search

_Timestamped = TypeVar("_Timestamped", MovementOut, MovementWithPartOut, ReportOut)


def _newest_first(items: Iterable[_Timestamped]) -> list[_Timestamped]:
    # Reverse insertion order first so equal timestamps list the latest insert first.
    return sorted(reversed(list(items)), key=lambda item: item.created_at, reverse=True)


class MemStorage:
    """Process-local ledger kept in dictionaries.

    All collection access goes through ``_lock``. The read-modify-write of a
    part's quantity additionally holds that part's own lock so concurrent
    movements against one part cannot lose an update.
    """

    name = "memory"

    def __init__(self, *, clock: Callable[[], datetime] = utcnow):
        self._clock = clock
        self._suppliers: dict[str, SupplierOut] = {}
        self._categories: dict[str, CategoryOut] = {}
        self._parts: dict[str, PartOut] = {}
        self._movements: dict[str, MovementOut] = {}
        self._reports: dict[str, ReportOut] = {}
        self._lock = RLock()
        self._part_locks: dict[str, Lock] = {}

    @contextmanager
    def _part_lock(self, part_id: str) -> Iterator[None]:
        # Unknown ids get no lock: there is no quantity to protect and the
        # map must not grow with ids that never existed.
        with self._lock:
            lock = self._part_locks.get(part_id)
            if lock is None and part_id in self._parts:
                lock = self._part_locks[part_id] = Lock()
        with lock or nullcontext():
            yield

    # Suppliers

    def get_suppliers(self) -> list[SupplierOut]:
        with self._lock:
            return list(self._suppliers.values())

    def get_supplier(self, supplier_id: str) -> SupplierOut | None:
        with self._lock:
            return self._suppliers.get(supplier_id)

    def create_supplier(self, data: SupplierCreate) -> SupplierOut:
        supplier = SupplierOut(id=generate_shortuuid(), **data.model_dump())
        with self._lock:
            self._suppliers[supplier.id] = supplier
        return supplier

    def update_supplier(self, supplier_id: str, data: SupplierUpdate) -> SupplierOut:
        with self._lock:
            existing = self._suppliers.get(supplier_id)
            if existing is None:
                raise NotFoundError("Supplier", supplier_id)
            updated = existing.model_copy(update=data.model_dump(exclude_unset=True))
            self._suppliers[supplier_id] = updated
            return updated

    def delete_supplier(self, supplier_id: str) -> bool:
        with self._lock:
            return self._suppliers.pop(supplier_id, None) is not None

    # Categories

    def get_categories(self) -> list[CategoryOut]:
        with self._lock:
            return list(self._categories.values())

    def get_category(self, category_id: str) -> CategoryOut | None:
        with self._lock:
            return self._categories.get(category_id)

    def _ensure_category_name_free(self, name: str, *, exclude_id: str | None = None) -> None:
        for category in self._categories.values():
            if category.name == name and category.id != exclude_id:
                raise DuplicateError("Category", "name", name)

    def create_category(self, data: CategoryCreate) -> CategoryOut:
        with self._lock:
            self._ensure_category_name_free(data.name)
            category = CategoryOut(id=generate_shortuuid(), **data.model_dump())
            self._categories[category.id] = category
            return category

    def update_category(self, category_id: str, data: CategoryUpdate) -> CategoryOut:
        changes = data.model_dump(exclude_unset=True)
        with self._lock:
            existing = self._categories.get(category_id)
            if existing is None:
                raise NotFoundError("Category", category_id)
            if "name" in changes:
                self._ensure_category_name_free(changes["name"], exclude_id=category_id)
            updated = existing.model_copy(update=changes)
            self._categories[category_id] = updated
            return updated

    def delete_category(self, category_id: str) -> bool:
        with self._lock:
            return self._categories.pop(category_id, None) is not None

    # Parts

    def _with_details(self, part: PartOut) -> PartWithDetailsOut:
        category = self._categories.get(part.category_id) if part.category_id else None
        supplier = self._suppliers.get(part.supplier_id) if part.supplier_id else None
        return PartWithDetailsOut(
            **part.model_dump(),
            category=category,
            supplier=supplier,
            stock_status=compute_stock_status(part.quantity, part.minimum_stock),
        )

    def _ensure_part_number_free(self, part_number: str, *, exclude_id: str | None = None) -> None:
        for part in self._parts.values():
            if part.part_number == part_number and part.id != exclude_id:
                raise DuplicateError("Part", "partNumber", part_number)

    def get_parts(self) -> list[PartWithDetailsOut]:
        with self._lock:
            return [self._with_details(part) for part in self._parts.values()]

    def get_part(self, part_id: str) -> PartWithDetailsOut | None:
        with self._lock:
            part = self._parts.get(part_id)
            return self._with_details(part) if part else None

    def get_part_by_part_number(self, part_number: str) -> PartWithDetailsOut | None:
        with self._lock:
            for part in self._parts.values():
                if part.part_number == part_number:
                    return self._with_details(part)
        return None

    def create_part(self, data: PartCreate) -> PartOut:
        now = self._clock()
        with self._lock:
            self._ensure_part_number_free(data.part_number)
            part = PartOut(
                id=generate_shortuuid(),
                created_at=now,
                updated_at=now,
                **data.model_dump(),
            )
            self._parts[part.id] = part
            return part

    def update_part(self, part_id: str, data: PartUpdate) -> PartOut:
        changes = data.model_dump(exclude_unset=True)
        with self._part_lock(part_id), self._lock:
            existing = self._parts.get(part_id)
            if existing is None:
                raise NotFoundError("Part", part_id)
            if "part_number" in changes:
                self._ensure_part_number_free(changes["part_number"], exclude_id=part_id)
            updated = existing.model_copy(update={**changes, "updated_at": self._clock()})
            self._parts[part_id] = updated
            return updated

    def delete_part(self, part_id: str) -> bool:
        with self._lock:
            self._part_locks.pop(part_id, None)
            return self._parts.pop(part_id, None) is not None

    def search_parts(self, query: str) -> list[PartWithDetailsOut]:
        with self._lock:
            return [
                self._with_details(part)
                for part in self._parts.values()
                if matches_search(part, query)
            ]

    def get_low_stock_parts(self) -> list[PartWithDetailsOut]:
        with self._lock:
            return [
                self._with_details(part)
                for part in self._parts.values()
                if is_low_stock(part.quantity, part.minimum_stock)
            ]

    # Movements

    def _join_part(self, movement: MovementOut) -> MovementWithPartOut | None:
        part = self._parts.get(movement.part_id)
        if part is None:
            return None
        return MovementWithPartOut(**movement.model_dump(), part=part)

    def _joined(self, movements: Iterable[MovementOut]) -> list[MovementWithPartOut]:
        joined = (self._join_part(movement) for movement in movements)
        return _newest_first(item for item in joined if item is not None)

    def get_movements(self) -> list[MovementWithPartOut]:
        with self._lock:
            return self._joined(self._movements.values())

    def get_movement(self, movement_id: str) -> MovementWithPartOut | None:
        with self._lock:
            movement = self._movements.get(movement_id)
            return self._join_part(movement) if movement else None

    def get_movements_by_part(self, part_id: str) -> list[MovementWithPartOut]:
        with self._lock:
            return self._joined(m for m in self._movements.values() if m.part_id == part_id)

    def create_movement(self, data: MovementCreate) -> MovementOut:
        with self._part_lock(data.part_id):
            with self._lock:
                movement = MovementOut(
                    id=generate_shortuuid(),
                    created_at=self._clock(),
                    **data.model_dump(),
                )
                self._movements[movement.id] = movement
                part = self._parts.get(data.part_id)

            if part is None:
                log_event(
                    "ledger",
                    action="movement.unmatched",
                    entity="movement",
                    entity_id=movement.id,
                    part_id=data.part_id,
                )
                return movement

            new_quantity = apply_movement(part.quantity, data.type, data.quantity)
            with self._lock:
                # The part may have been deleted while we computed.
                if part.id in self._parts:
                    self._parts[part.id] = self._parts[part.id].model_copy(
                        update={"quantity": new_quantity, "updated_at": self._clock()}
                    )

        log_event(
            "ledger",
            action="movement.apply",
            entity="part",
            entity_id=part.id,
            movement_id=movement.id,
            type=data.type.value,
            quantity_before=part.quantity,
            quantity_after=new_quantity,
        )
        return movement

    # Stats

    def get_inventory_stats(self) -> InventoryStatsOut:
        with self._lock:
            return summarize_inventory(self._parts.values(), len(self._suppliers))

    # Reports

    def get_reports(self) -> list[ReportOut]:
        with self._lock:
            return _newest_first(self._reports.values())

    def create_report(self, data: ReportCreate) -> ReportOut:
        with self._lock:
            report = ReportOut(id=generate_shortuuid(), created_at=self._clock(), **data.model_dump())
            self._reports[report.id] = report
            return report
