from decimal import Decimal

from partsflow.core.observability import log_event
from partsflow.schemas.category import CategoryCreate
from partsflow.schemas.part import PartCreate
from partsflow.schemas.supplier import SupplierCreate
from partsflow.storage.base import Storage

DEFAULT_CATEGORIES = [
    ("Engine Parts", "Engine components and accessories"),
    ("Braking System", "Brake pads, discs, and hydraulics"),
    ("Transmission", "Transmission parts and fluids"),
    ("Hydraulics", "Hydraulic pumps, hoses, and cylinders"),
    ("Electrical", "Electrical components and wiring"),
    ("Fuel System", "Fuel injectors, filters, and pumps"),
]

DEFAULT_SUPPLIERS = [
    ("AutoParts Co.", "info@autoparts.com", "+1-555-0123"),
    ("EngineMax Ltd.", "sales@enginemax.com", "+1-555-0124"),
    ("HydroSystems", "orders@hydrosystems.com", "+1-555-0125"),
    ("TransParts Inc.", "support@transparts.com", "+1-555-0126"),
    ("FuelTech Pro", "contact@fueltech.com", "+1-555-0127"),
]

SAMPLE_PARTS = [
    {
        "name": "Air Filter Heavy Duty",
        "part_number": "AF-HD-001",
        "description": "High-performance air filter for heavy vehicles",
        "quantity": 25,
        "minimum_stock": 10,
        "unit_price": Decimal("45.99"),
        "location": "A1-B2-C3",
    },
    {
        "name": "Brake Pad Set Front",
        "part_number": "BP-F-002",
        "description": "Front brake pad set for heavy duty trucks",
        "quantity": 8,
        "minimum_stock": 12,
        "unit_price": Decimal("89.50"),
        "location": "B2-C3-D4",
    },
    {
        "name": "Hydraulic Pump",
        "part_number": "HP-001",
        "description": "Main hydraulic pump for lifting systems",
        "quantity": 3,
        "minimum_stock": 5,
        "unit_price": Decimal("450.00"),
        "location": "C1-A2-B3",
    },
    {
        "name": "Engine Oil Filter",
        "part_number": "OF-ENG-003",
        "description": "Premium engine oil filter",
        "quantity": 0,
        "minimum_stock": 15,
        "unit_price": Decimal("28.75"),
        "location": "A2-B1-C2",
    },
]


def seed_sample_data(storage: Storage) -> bool:
    """Load the starter catalogue into an empty store. Returns False if skipped."""
    if storage.get_parts() or storage.get_categories() or storage.get_suppliers():
        return False

    categories = [
        storage.create_category(CategoryCreate(name=name, description=description))
        for name, description in DEFAULT_CATEGORIES
    ]
    suppliers = [
        storage.create_supplier(SupplierCreate(name=name, contact_email=email, contact_phone=phone))
        for name, email, phone in DEFAULT_SUPPLIERS
    ]
    for index, part_data in enumerate(SAMPLE_PARTS):
        storage.create_part(
            PartCreate(
                **part_data,
                category_id=categories[index % len(categories)].id,
                supplier_id=suppliers[index % len(suppliers)].id,
            )
        )

    log_event(
        "seed",
        categories=len(categories),
        suppliers=len(suppliers),
        parts=len(SAMPLE_PARTS),
    )
    return True
