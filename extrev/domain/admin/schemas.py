"""Admin domain schemas - user management"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ...schemas import FormResponse
from ...shared.validators import (
    blank_to_none,
    validate_city,
    validate_email,
    validate_primary_address,
    validate_secondary_address,
    validate_state_code,
    validate_us_phone,
    validate_username,
    validate_zip,
)


def format_updated_at(value: Optional[datetime]) -> str:
    """'Mar 4, 3:07' style timestamp for the edit forms"""
    if value is None:
        return "Never Updated"
    hour = value.hour % 12 or 12
    return f"{value:%b} {value.day}, {hour}:{value:%M}"


class AdminUserEntity(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    slug: str
    username: str
    email: str
    user_type_id: int
    avatar_path: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    updated_at_fmt: str = "Never Updated"

    @model_validator(mode="after")
    def format_timestamps(self):
        self.updated_at_fmt = format_updated_at(self.updated_at)
        return self


class SubadminEntity(AdminUserEntity):
    address_one: Optional[str] = None
    address_two: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    primary_phone: Optional[str] = None


class AdminUserUpdate(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    user_type_id: Optional[int] = Field(None, ge=1, le=4)

    @field_validator("*", mode="before")
    @classmethod
    def blank_fields(cls, v):
        return blank_to_none(v)

    @field_validator("username")
    @classmethod
    def check_username(cls, v):
        return validate_username(v) if v else v

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)


class SubadminUpdate(AdminUserUpdate):
    address_one: Optional[str] = None
    address_two: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    primary_phone: Optional[str] = None

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


class AdminUserFormResponse(FormResponse):
    entity: Optional[AdminUserEntity] = None


class SubadminFormResponse(FormResponse):
    entity: Optional[SubadminEntity] = None
