from collections.abc import Callable, Iterator
from contextlib import contextmanager, nullcontext
from datetime import datetime
from threading import RLock

from sqlalchemy import func, or_, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from partsflow.core.errors import DuplicateError, NotFoundError
from partsflow.core.id_utils import as_utc, generate_shortuuid, utcnow
from partsflow.core.observability import log_event
from partsflow.db.base import Base
from partsflow.db.session import build_session_factory
from partsflow.models.category import Category
from partsflow.models.movement import Movement
from partsflow.models.part import Part
from partsflow.models.report import Report
from partsflow.models.supplier import Supplier
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
from partsflow.services.inventory_service import apply_movement, compute_stock_status
from partsflow.services.part_filter import matches_search


def _supplier_out(row: Supplier) -> SupplierOut:
    return SupplierOut(
        id=row.id,
        name=row.name,
        contact_email=row.contact_email,
        contact_phone=row.contact_phone,
        address=row.address,
    )


def _category_out(row: Category) -> CategoryOut:
    return CategoryOut(id=row.id, name=row.name, description=row.description)


def _part_out(row: Part) -> PartOut:
    return PartOut(
        id=row.id,
        name=row.name,
        part_number=row.part_number,
        description=row.description,
        category_id=row.category_id,
        supplier_id=row.supplier_id,
        quantity=row.quantity,
        minimum_stock=row.minimum_stock,
        unit_price=row.unit_price,
        location=row.location,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


def _part_with_details_out(
    row: Part, category: Category | None, supplier: Supplier | None
) -> PartWithDetailsOut:
    return PartWithDetailsOut(
        **_part_out(row).model_dump(),
        category=_category_out(category) if category else None,
        supplier=_supplier_out(supplier) if supplier else None,
        stock_status=compute_stock_status(row.quantity, row.minimum_stock),
    )


def _movement_out(row: Movement) -> MovementOut:
    return MovementOut(
        id=row.id,
        part_id=row.part_id,
        type=row.type,
        quantity=row.quantity,
        reason=row.reason,
        created_at=as_utc(row.created_at),
    )


def _report_out(row: Report) -> ReportOut:
    return ReportOut(
        id=row.id,
        name=row.name,
        type=row.type,
        date_range=row.date_range,
        created_at=as_utc(row.created_at),
    )


def _parts_with_details_stmt():
    return (
        select(Part, Category, Supplier)
        .outerjoin(Category, Category.id == Part.category_id)
        .outerjoin(Supplier, Supplier.id == Part.supplier_id)
    )


class SqlStorage:
    """Ledger backed by SQLAlchemy; one session and transaction per operation."""

    name = "sql"

    def __init__(
        self,
        engine: Engine,
        *,
        clock: Callable[[], datetime] = utcnow,
        create_schema: bool = True,
    ):
        self.engine = engine
        self._clock = clock
        self._session_factory = build_session_factory(engine)
        # SQLite ignores FOR UPDATE and an in-memory database shares one
        # connection across threads, so every operation is serialized there.
        self._is_sqlite = engine.dialect.name == "sqlite"
        self._lock = RLock() if self._is_sqlite else nullcontext()
        if create_schema:
            Base.metadata.create_all(bind=engine)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        with self._lock, self._session_factory() as db:
            yield db

    # Suppliers

    def get_suppliers(self) -> list[SupplierOut]:
        with self._session() as db:
            rows = db.execute(select(Supplier)).scalars().all()
            return [_supplier_out(row) for row in rows]

    def get_supplier(self, supplier_id: str) -> SupplierOut | None:
        with self._session() as db:
            row = db.get(Supplier, supplier_id)
            return _supplier_out(row) if row else None

    def create_supplier(self, data: SupplierCreate) -> SupplierOut:
        with self._session() as db, db.begin():
            row = Supplier(id=generate_shortuuid(), **data.model_dump())
            db.add(row)
            db.flush()
            return _supplier_out(row)

    def update_supplier(self, supplier_id: str, data: SupplierUpdate) -> SupplierOut:
        with self._session() as db, db.begin():
            row = db.get(Supplier, supplier_id)
            if row is None:
                raise NotFoundError("Supplier", supplier_id)
            for field, value in data.model_dump(exclude_unset=True).items():
                setattr(row, field, value)
            db.flush()
            return _supplier_out(row)

    def delete_supplier(self, supplier_id: str) -> bool:
        with self._session() as db, db.begin():
            row = db.get(Supplier, supplier_id)
            if row is None:
                return False
            db.delete(row)
            return True

    # Categories

    def get_categories(self) -> list[CategoryOut]:
        with self._session() as db:
            rows = db.execute(select(Category)).scalars().all()
            return [_category_out(row) for row in rows]

    def get_category(self, category_id: str) -> CategoryOut | None:
        with self._session() as db:
            row = db.get(Category, category_id)
            return _category_out(row) if row else None

    def _ensure_category_name_free(
        self, db: Session, name: str, *, exclude_id: str | None = None
    ) -> None:
        stmt = select(Category.id).where(Category.name == name)
        if exclude_id:
            stmt = stmt.where(Category.id != exclude_id)
        if db.execute(stmt).first() is not None:
            raise DuplicateError("Category", "name", name)

    def create_category(self, data: CategoryCreate) -> CategoryOut:
        with self._session() as db, db.begin():
            self._ensure_category_name_free(db, data.name)
            row = Category(id=generate_shortuuid(), **data.model_dump())
            db.add(row)
            db.flush()
            return _category_out(row)

    def update_category(self, category_id: str, data: CategoryUpdate) -> CategoryOut:
        changes = data.model_dump(exclude_unset=True)
        with self._session() as db, db.begin():
            row = db.get(Category, category_id)
            if row is None:
                raise NotFoundError("Category", category_id)
            if "name" in changes:
                self._ensure_category_name_free(db, changes["name"], exclude_id=category_id)
            for field, value in changes.items():
                setattr(row, field, value)
            db.flush()
            return _category_out(row)

    def delete_category(self, category_id: str) -> bool:
        with self._session() as db, db.begin():
            row = db.get(Category, category_id)
            if row is None:
                return False
            db.delete(row)
            return True

    # Parts

    def _ensure_part_number_free(
        self, db: Session, part_number: str, *, exclude_id: str | None = None
    ) -> None:
        stmt = select(Part.id).where(Part.part_number == part_number)
        if exclude_id:
            stmt = stmt.where(Part.id != exclude_id)
        if db.execute(stmt).first() is not None:
            raise DuplicateError("Part", "partNumber", part_number)

    def _select_parts(self, *criteria) -> list[PartWithDetailsOut]:
        with self._session() as db:
            rows = db.execute(
                _parts_with_details_stmt().where(*criteria).order_by(Part.created_at)
            ).all()
            return [_part_with_details_out(part, category, supplier) for part, category, supplier in rows]

    def get_parts(self) -> list[PartWithDetailsOut]:
        return self._select_parts()

    def get_part(self, part_id: str) -> PartWithDetailsOut | None:
        found = self._select_parts(Part.id == part_id)
        return found[0] if found else None

    def get_part_by_part_number(self, part_number: str) -> PartWithDetailsOut | None:
        found = self._select_parts(Part.part_number == part_number)
        return found[0] if found else None

    def create_part(self, data: PartCreate) -> PartOut:
        now = self._clock()
        with self._session() as db, db.begin():
            self._ensure_part_number_free(db, data.part_number)
            row = Part(id=generate_shortuuid(), created_at=now, updated_at=now, **data.model_dump())
            db.add(row)
            db.flush()
            return _part_out(row)

    def update_part(self, part_id: str, data: PartUpdate) -> PartOut:
        changes = data.model_dump(exclude_unset=True)
        with self._session() as db, db.begin():
            row = db.execute(
                select(Part).where(Part.id == part_id).with_for_update()
            ).scalar_one_or_none()
            if row is None:
                raise NotFoundError("Part", part_id)
            if "part_number" in changes:
                self._ensure_part_number_free(db, changes["part_number"], exclude_id=part_id)
            for field, value in changes.items():
                setattr(row, field, value)
            row.updated_at = self._clock()
            db.flush()
            return _part_out(row)

    def delete_part(self, part_id: str) -> bool:
        with self._session() as db, db.begin():
            row = db.get(Part, part_id)
            if row is None:
                return False
            db.delete(row)
            return True

    def search_parts(self, query: str) -> list[PartWithDetailsOut]:
        if self._is_sqlite:
            # SQLite lower() only folds ASCII.
            return [part for part in self.get_parts() if matches_search(part, query)]
        needle = query.lower()
        return self._select_parts(
            or_(
                func.lower(Part.name).contains(needle, autoescape=True),
                func.lower(Part.part_number).contains(needle, autoescape=True),
                func.lower(Part.description).contains(needle, autoescape=True),
            )
        )

    def get_low_stock_parts(self) -> list[PartWithDetailsOut]:
        return self._select_parts(Part.quantity <= Part.minimum_stock)

    # Movements

    def _select_movements(self, *criteria) -> list[MovementWithPartOut]:
        # Inner join: movements whose part is gone drop out of the listing.
        with self._session() as db:
            rows = db.execute(
                select(Movement, Part)
                .join(Part, Part.id == Movement.part_id)
                .where(*criteria)
                .order_by(Movement.created_at.desc())
            ).all()
            return [
                MovementWithPartOut(**_movement_out(movement).model_dump(), part=_part_out(part))
                for movement, part in rows
            ]

    def get_movements(self) -> list[MovementWithPartOut]:
        return self._select_movements()

    def get_movement(self, movement_id: str) -> MovementWithPartOut | None:
        found = self._select_movements(Movement.id == movement_id)
        return found[0] if found else None

    def get_movements_by_part(self, part_id: str) -> list[MovementWithPartOut]:
        return self._select_movements(Movement.part_id == part_id)

    def create_movement(self, data: MovementCreate) -> MovementOut:
        with self._session() as db, db.begin():
            row = Movement(
                id=generate_shortuuid(),
                part_id=data.part_id,
                type=data.type.value,
                quantity=data.quantity,
                reason=data.reason,
                created_at=self._clock(),
            )
            db.add(row)
            part = db.execute(
                select(Part).where(Part.id == data.part_id).with_for_update()
            ).scalar_one_or_none()
            quantity_before = part.quantity if part else None
            if part is not None:
                part.quantity = apply_movement(part.quantity, data.type, data.quantity)
                part.updated_at = self._clock()
            db.flush()
            movement = _movement_out(row)
            quantity_after = part.quantity if part else None

        if part is None:
            log_event(
                "ledger",
                action="movement.unmatched",
                entity="movement",
                entity_id=movement.id,
                part_id=data.part_id,
            )
        else:
            log_event(
                "ledger",
                action="movement.apply",
                entity="part",
                entity_id=data.part_id,
                movement_id=movement.id,
                type=data.type.value,
                quantity_before=quantity_before,
                quantity_after=quantity_after,
            )
        return movement

    # Stats

    def get_inventory_stats(self) -> InventoryStatsOut:
        with self._session() as db:
            parts = [_part_out(row) for row in db.execute(select(Part)).scalars().all()]
            supplier_count = int(db.execute(select(func.count(Supplier.id))).scalar_one())
        return summarize_inventory(parts, supplier_count)

    # Reports

    def get_reports(self) -> list[ReportOut]:
        with self._session() as db:
            rows = db.execute(select(Report).order_by(Report.created_at.desc())).scalars().all()
            return [_report_out(row) for row in rows]

    def create_report(self, data: ReportCreate) -> ReportOut:
        with self._session() as db, db.begin():
            row = Report(
                id=generate_shortuuid(),
                name=data.name,
                type=data.type.value,
                date_range=data.date_range,
                created_at=self._clock(),
            )
            db.add(row)
            db.flush()
            return _report_out(row)
