"""User domain schemas"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import blank_to_none, validate_email, validate_username


class UserSettingsResponse(BaseModel):
    slug: str
    username: str
    email: str
    theme_id: int
    list_view: str
    avatar_path: Optional[str] = None


class UserSettingsUpdate(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    theme_id: Optional[int] = None
    list_view: Optional[Literal["consult", "consultant", "location", "client"]] = None

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

    @field_validator("theme_id")
    @classmethod
    def check_theme(cls, v):
        if v is not None and not 1 <= v <= 2:
            raise ValueError("Unknown theme")
        return v


class SubscriptionToggleResponse(BaseModel):
    entity_type_id: int
    slug: str
    subscribed: bool


class UserSubscriptions(BaseModel):
    consultant_subs: list[str] = []
    location_subs: list[str] = []
    consult_subs: list[str] = []
    client_subs: list[str] = []


class FeedItem(BaseModel):
    slug: str
    consultant_name: str
    client_name: str
    location_name: str
    consult_start: datetime
    consult_end: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AvatarResponse(BaseModel):
    avatar_path: str
