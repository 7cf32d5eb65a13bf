import json
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import ConfigDict, field_validator

from partsflow.schemas.common import CamelModel


class ReportType(str, Enum):
    INVENTORY = "inventory"
    LOW_STOCK = "low-stock"
    MOVEMENTS = "movements"
    SUPPLIER_ANALYSIS = "supplier-analysis"


class ReportCreate(CamelModel):
    name: str
    type: ReportType
    date_range: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("name is required")
        return cleaned

    @field_validator("date_range", mode="before")
    @classmethod
    def serialize_date_range(cls, value: Any) -> Any:
        # The range is stored opaquely; structured input is kept as its JSON text.
        if isinstance(value, (dict, list)):
            return json.dumps(value, sort_keys=True)
        return value

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Monthly low stock",
                "type": "low-stock",
                "dateRange": {"from": "2026-09-01", "to": "2026-09-30"},
            }
        }
    )


class ReportOut(CamelModel):
    id: str
    name: str
    type: ReportType
    date_range: str
    created_at: datetime
