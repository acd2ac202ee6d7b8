"""Consult domain schemas"""

from datetime import date, datetime, time
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from ...schemas import FormResponse
from ...shared.validators import blank_to_none


class ConsultFields(BaseModel):
    """Start and end arrive as separate date and time inputs"""

    consultant_id: Optional[int] = None
    client_id: Optional[int] = None
    location_id: Optional[int] = None
    consult_purpose_id: Optional[int] = None
    consult_result_id: Optional[int] = None
    start_date: Optional[date] = None
    start_time: Optional[time] = None
    end_date: Optional[date] = None
    end_time: Optional[time] = None
    notes: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_fields(cls, v):
        return blank_to_none(v)

    @field_validator("notes")
    @classmethod
    def check_notes(cls, v):
        if v is None:
            return v
        v = v.strip()
        if len(v) < 3:
            raise ValueError("Notes must be at least 3 characters")
        return v

    @model_validator(mode="after")
    def check_times(self):
        if (self.start_date is None) != (self.start_time is None):
            raise ValueError("Start needs both a date and a time")
        if self.end_time is not None and self.end_date is None:
            # Most consults end the day they start
            self.end_date = self.start_date
        if (self.end_date is None) != (self.end_time is None):
            raise ValueError("End needs both a date and a time")
        if self.consult_start and self.consult_end and self.consult_end <= self.consult_start:
            raise ValueError("Consult must end after it starts")
        return self

    @property
    def consult_start(self) -> Optional[datetime]:
        if self.start_date and self.start_time:
            return datetime.combine(self.start_date, self.start_time)
        return None

    @property
    def consult_end(self) -> Optional[datetime]:
        if self.end_date and self.end_time:
            return datetime.combine(self.end_date, self.end_time)
        return None

    def entity_fields(self) -> dict:
        """Column values for the consults table, without unset fields"""
        fields = self.model_dump(
            exclude_none=True,
            exclude={"start_date", "start_time", "end_date", "end_time"},
        )
        if self.consult_start:
            fields["consult_start"] = self.consult_start
        if self.consult_end:
            fields["consult_end"] = self.consult_end
        return fields


class ConsultCreate(ConsultFields):
    @model_validator(mode="after")
    def check_required(self):
        missing = [
            name
            for name in ("consultant_id", "client_id", "location_id", "start_date", "end_time")
            if getattr(self, name) is None
        ]
        if missing:
            raise ValueError(f"Missing required fields: {', '.join(missing)}")
        return self


class ConsultUpdate(ConsultFields):
    pass


class ConsultResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    slug: str
    consultant_id: int
    client_id: int
    location_id: int
    consult_purpose_id: Optional[int] = None
    consult_result_id: Optional[int] = None
    consult_start: datetime
    consult_end: datetime
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ConsultFormResponse(FormResponse):
    entity: Optional[ConsultResponse] = None


class AttachmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    slug: str
    short_desc: Optional[str] = None
    mime_type: str
    path: str
    size: int
    created_at: Optional[datetime] = None
