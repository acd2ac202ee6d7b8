"""Consultant domain schemas"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ...schemas import FormResponse
from ...shared.validators import blank_to_none


class ConsultantFields(BaseModel):
    f_name: Optional[str] = Field(None, max_length=64)
    l_name: Optional[str] = Field(None, max_length=64)
    specialty_id: Optional[int] = None
    territory_id: Optional[int] = None
    user_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_fields(cls, v):
        return blank_to_none(v)

    @field_validator("f_name", "l_name")
    @classmethod
    def check_name(cls, v):
        if v is None:
            return v
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Names must be at least 2 characters")
        return v

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("End date cannot be before start date")
        return self


class ConsultantCreate(ConsultantFields):
    @model_validator(mode="after")
    def check_required(self):
        missing = [
            name
            for name in ("f_name", "l_name", "specialty_id", "territory_id")
            if getattr(self, name) is None
        ]
        if missing:
            raise ValueError(f"Missing required fields: {', '.join(missing)}")
        return self


class ConsultantUpdate(ConsultantFields):
    pass


class ConsultantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    slug: str
    full_name: str
    f_name: str
    l_name: str
    specialty_id: int
    territory_id: int
    user_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None
    img_path: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ConsultantFormResponse(FormResponse):
    entity: Optional[ConsultantResponse] = None
