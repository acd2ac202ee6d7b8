"""Client domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from ...schemas import FormResponse
from ...shared.validators import (
    blank_to_none,
    validate_city,
    validate_email,
    validate_primary_address,
    validate_secondary_address,
    validate_state_code,
    validate_us_phone,
    validate_zip,
)


class ClientFields(BaseModel):
    f_name: Optional[str] = None
    l_name: Optional[str] = None
    company_name: Optional[str] = None
    address_one: Optional[str] = None
    address_two: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    dob: Optional[date] = None
    primary_phone: Optional[str] = None
    email: Optional[str] = None
    account_id: Optional[int] = None
    specialty_id: Optional[int] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_fields(cls, v):
        return blank_to_none(v)

    @field_validator("f_name", "l_name", "company_name")
    @classmethod
    def strip_names(cls, v):
        return v.strip() if v else v

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

    @field_validator("primary_phone")
    @classmethod
    def check_phone(cls, v):
        return validate_us_phone(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)


class ClientCreate(ClientFields):
    """Schema for the add-client form"""

    @model_validator(mode="after")
    def check_required(self):
        if not self.company_name and not (self.f_name and self.l_name):
            raise ValueError("Either a company name or a first and last name is required")
        missing = [
            name for name in ("address_one", "city", "state", "zip") if getattr(self, name) is None
        ]
        if missing:
            raise ValueError(f"Missing required fields: {', '.join(missing)}")
        return self


class ClientUpdate(ClientFields):
    """Schema for the edit-client form; blank fields are left unchanged"""


class ClientResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    slug: str
    display_name: str
    f_name: Optional[str] = None
    l_name: Optional[str] = None
    company_name: Optional[str] = None
    address_one: str
    address_two: Optional[str] = None
    city: str
    state: str
    zip: str
    dob: Optional[date] = None
    primary_phone: Optional[str] = None
    email: Optional[str] = None
    account_id: Optional[int] = None
    specialty_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ClientFormResponse(FormResponse):
    entity: Optional[ClientResponse] = None
