"""Event (calendar) schemas"""

from typing import Optional

from pydantic import BaseModel


class MonthRef(BaseModel):
    year: int
    month: int
    url: str


class CalendarMonth(BaseModel):
    year: int
    month: int
    month_name: str
    # 0 = Sunday
    first_day_of_month: int
    num_days: int
    weekday_labels: list[str]
    weeks: list[list[Optional[int]]]
    prev_month: MonthRef
    next_month: MonthRef
    consults: dict[int, list[dict]]


class LocationMatch(BaseModel):
    slug: str
    location_name: str
    city: str
    state: str
