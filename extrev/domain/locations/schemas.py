"""Location domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ...schemas import FormResponse
from ...shared.validators import (
    blank_to_none,
    validate_city,
    validate_primary_address,
    validate_secondary_address,
    validate_state_code,
    validate_us_phone,
    validate_zip,
)


class LocationFields(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    address_one: Optional[str] = None
    address_two: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    phone: Optional[str] = None
    contact_id: Optional[int] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_fields(cls, v):
        return blank_to_none(v)

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        if v is None:
            return v
        v = v.strip()
        if len(v) < 3:
            raise ValueError("Location name must be at least 3 characters")
        return v

    @field_validator("address_one")
    @classmethod
    def check_address_one(cls, v):
        return validate_primary_address(v) if v else v

    @field_validator("address_two")
    @classmethod
    def check_address_two(cls, v):
        return validate_secondary_address(v)

    @field_validator("city")
    @classmethod
    def check_city(cls, v):
        return validate_city(v) if v else v

    @field_validator("state")
    @classmethod
    def check_state(cls, v):
        return validate_state_code(v) if v else v

    @field_validator("zip")
    @classmethod
    def check_zip(cls, v):
        return validate_zip(v) if v else v

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        return validate_us_phone(v)


class LocationCreate(LocationFields):
    @model_validator(mode="after")
    def check_required(self):
        missing = [
            name for name in ("name", "address_one", "city", "state", "zip") if getattr(self, name) is None
        ]
        if missing:
            raise ValueError(f"Missing required fields: {', '.join(missing)}")
        return self


class LocationUpdate(LocationFields):
    """All fields optional; blank fields are left unchanged"""


class LocationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    slug: str
    name: str
    address_one: str
    address_two: Optional[str] = None
    city: str
    state: str
    zip: str
    phone: Optional[str] = None
    contact_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LocationFormResponse(FormResponse):
    entity: Optional[LocationResponse] = None
