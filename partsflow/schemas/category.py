from typing import Optional

from pydantic import ConfigDict, field_validator

from partsflow.schemas.common import CamelModel


class CategoryCreate(CamelModel):
    name: str
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("name is required")
        return cleaned

    @field_validator("description")
    @classmethod
    def normalize_description(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        cleaned = value.strip()
        return cleaned or None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Braking System",
                "description": "Brake pads, discs, and hydraulics",
            }
        }
    )


class CategoryUpdate(CategoryCreate):
    name: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: Optional[str]) -> str:
        cleaned = (value or "").strip()
        if not cleaned:
            raise ValueError("name is required")
        return cleaned


class CategoryOut(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
