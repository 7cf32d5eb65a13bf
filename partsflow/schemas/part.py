from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from partsflow.core.money import ZERO_MONEY, to_money
from partsflow.schemas.category import CategoryOut
from partsflow.schemas.common import CamelModel
from partsflow.schemas.supplier import SupplierOut


class StockStatus(str, Enum):
    IN_STOCK = "in-stock"
    LOW_STOCK = "low-stock"
    OUT_OF_STOCK = "out-of-stock"


class PartCreate(CamelModel):
    name: str
    part_number: str
    description: Optional[str] = None
    category_id: Optional[str] = None
    supplier_id: Optional[str] = None
    quantity: int = Field(default=0, ge=0)
    minimum_stock: int = Field(default=0, ge=0)
    unit_price: Decimal = Field(default=ZERO_MONEY, ge=0, max_digits=10, decimal_places=2)
    location: Optional[str] = None

    @field_validator("name", "part_number")
    @classmethod
    def validate_required_text(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("must not be empty")
        return cleaned

    @field_validator("description", "category_id", "supplier_id", "location")
    @classmethod
    def normalize_optional_text(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        cleaned = value.strip()
        return cleaned or None

    @field_validator("unit_price")
    @classmethod
    def quantize_unit_price(cls, value: Decimal) -> Decimal:
        return to_money(value)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Brake Pad Set Front",
                "partNumber": "BP-F-002",
                "description": "Front brake pad set for heavy duty trucks",
                "categoryId": "category-id-here",
                "supplierId": "supplier-id-here",
                "quantity": 8,
                "minimumStock": 12,
                "unitPrice": "89.50",
                "location": "B2-C3-D4",
            }
        }
    )


class PartUpdate(CamelModel):
    """Partial update: only fields present in the body are applied."""

    name: Optional[str] = None
    part_number: Optional[str] = None
    description: Optional[str] = None
    category_id: Optional[str] = None
    supplier_id: Optional[str] = None
    quantity: Optional[int] = Field(default=None, ge=0)
    minimum_stock: Optional[int] = Field(default=None, ge=0)
    unit_price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    location: Optional[str] = None

    @field_validator("name", "part_number")
    @classmethod
    def validate_required_text(cls, value: Optional[str]) -> str:
        cleaned = (value or "").strip()
        if not cleaned:
            raise ValueError("must not be empty")
        return cleaned

    @field_validator("quantity", "minimum_stock")
    @classmethod
    def reject_null(cls, value: Optional[int]) -> int:
        if value is None:
            raise ValueError("must not be null")
        return value

    @field_validator("description", "category_id", "supplier_id", "location")
    @classmethod
    def normalize_optional_text(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        cleaned = value.strip()
        return cleaned or None

    @field_validator("unit_price")
    @classmethod
    def quantize_unit_price(cls, value: Optional[Decimal]) -> Decimal:
        if value is None:
            raise ValueError("must not be null")
        return to_money(value)


class PartOut(CamelModel):
    id: str
    name: str
    part_number: str
    description: Optional[str] = None
    category_id: Optional[str] = None
    supplier_id: Optional[str] = None
    quantity: int
    minimum_stock: int
    unit_price: Decimal
    location: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PartWithDetailsOut(PartOut):
    category: Optional[CategoryOut] = None
    supplier: Optional[SupplierOut] = None
    stock_status: StockStatus
