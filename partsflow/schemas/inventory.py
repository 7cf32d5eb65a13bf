from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from partsflow.schemas.common import CamelModel
from partsflow.schemas.part import PartOut


class MovementType(str, Enum):
    IN = "in"
    OUT = "out"


class MovementCreate(CamelModel):
    part_id: str
    type: MovementType
    quantity: int = Field(gt=0, description="Magnitude of the change; the type gives the sign.")
    reason: Optional[str] = None

    @field_validator("part_id")
    @classmethod
    def validate_part_id(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("partId is required")
        return cleaned

    @field_validator("reason")
    @classmethod
    def normalize_reason(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        cleaned = value.strip()
        return cleaned or None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "partId": "part-id-here",
                "type": "out",
                "quantity": 2,
                "reason": "Used on truck 14 brake job",
            }
        }
    )


class MovementOut(CamelModel):
    id: str
    part_id: str
    type: MovementType
    quantity: int
    reason: Optional[str] = None
    created_at: datetime


class MovementWithPartOut(MovementOut):
    part: PartOut


class InventoryStatsOut(CamelModel):
    total_parts: int
    low_stock_count: int
    total_value: Decimal
    active_suppliers: int

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "totalParts": 4,
                "lowStockCount": 3,
                "totalValue": "3215.75",
                "activeSuppliers": 5,
            }
        }
    )
