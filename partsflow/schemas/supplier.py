from typing import Optional

from pydantic import ConfigDict, field_validator

from partsflow.schemas.common import CamelModel


def _clean_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


class SupplierCreate(CamelModel):
    name: str
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    address: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("name is required")
        return cleaned

    @field_validator("contact_email", "contact_phone", "address")
    @classmethod
    def normalize_optional_text(cls, value: Optional[str]) -> Optional[str]:
        return _clean_optional(value)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "AutoParts Co.",
                "contactEmail": "info@autoparts.com",
                "contactPhone": "+1-555-0123",
                "address": None,
            }
        }
    )


class SupplierUpdate(CamelModel):
    name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    address: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: Optional[str]) -> str:
        cleaned = (value or "").strip()
        if not cleaned:
            raise ValueError("name is required")
        return cleaned

    @field_validator("contact_email", "contact_phone", "address")
    @classmethod
    def normalize_optional_text(cls, value: Optional[str]) -> Optional[str]:
        return _clean_optional(value)


class SupplierOut(CamelModel):
    id: str
    name: str
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    address: Optional[str] = None
