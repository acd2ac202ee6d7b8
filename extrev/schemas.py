"""Shared view models used across the domain routers"""

from datetime import datetime
from typing import Literal, Optional
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

from .config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

TABLE_TITLES = {
    1: "Users",
    2: "Admins",
    3: "Subadmins",
    4: "Consultants",
    5: "Locations",
    6: "Consults",
    7: "Clients",
}


class SelectOption(BaseModel):
    value: int
    key: str


class StringSelectOption(BaseModel):
    value: str
    key: str


class FilterOptions(BaseModel):
    """Query string accepted by every list route"""

    page: int = Field(1, ge=1)
    limit: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    search: Optional[str] = Field(None, max_length=36)
    key: Optional[str] = None
    dir: Literal["asc", "desc"] = "asc"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class MessageResponse(BaseModel):
    message: str
    slug: Optional[str] = None


class ValidationResponse(BaseModel):
    """Inline field feedback, e.g. for the email availability check"""

    model_config = ConfigDict(populate_by_name=True)

    msg: str
    class_: str = Field(alias="class")


class ValidatedUser(BaseModel):
    """The user behind a live session cookie"""

    user_id: int
    slug: str
    username: str
    email: str
    user_type_id: int
    theme_id: int = 1
    list_view: str = "consult"
    avatar_path: Optional[str] = None
    expires: datetime


class ResponsiveTableData(BaseModel):
    entity_type_id: int
    table_title: str
    page: int
    limit: int
    vec_len: int
    lookup_url: str
    next_page_url: Optional[str] = None
    subscriptions: list[str] = []
    entities: list[dict]

    @classmethod
    def build(
        cls,
        entity_type_id: int,
        lookup_url: str,
        opts: FilterOptions,
        entities: list[dict],
        subscriptions: Optional[list[str]] = None,
    ) -> "ResponsiveTableData":
        next_page_url = None
        # A full page means there may be more rows
        if len(entities) == opts.limit:
            params = {"page": opts.page + 1, "limit": opts.limit}
            if opts.search:
                params["search"] = opts.search
            if opts.key:
                params["key"] = opts.key
                params["dir"] = opts.dir
            next_page_url = f"{lookup_url}?{urlencode(params)}"

        return cls(
            entity_type_id=entity_type_id,
            table_title=TABLE_TITLES.get(entity_type_id, "Records"),
            page=opts.page,
            limit=opts.limit,
            vec_len=len(entities),
            lookup_url=lookup_url,
            next_page_url=next_page_url,
            subscriptions=subscriptions or [],
            entities=entities,
        )


class FormResponse(BaseModel):
    """Data behind an add/edit form. Subclasses add a typed `entity` field."""

    header: str
    options: dict[str, list[SelectOption | StringSelectOption]] = {}
