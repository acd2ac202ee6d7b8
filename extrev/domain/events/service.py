"""Event service - month calendar of consults"""

import calendar
from collections import defaultdict
from datetime import datetime

from sqlalchemy.orm import Session

from ..consults.service import ConsultService
from ..locations.service import LocationService
from .schemas import CalendarMonth, LocationMatch, MonthRef

WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """(2024, 12, +1) -> (2025, 1)"""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_ref(year: int, month: int) -> MonthRef:
    return MonthRef(year=year, month=month, url=f"/event/calendar/{year}/{month}")


class EventService:
    def __init__(self, db: Session):
        self.db = db

    def calendar_month(self, year: int, month: int) -> CalendarMonth:
        first_weekday, num_days = calendar.monthrange(year, month)
        weeks = [
            [day or None for day in week]
            for week in calendar.Calendar(firstweekday=calendar.SUNDAY).monthdayscalendar(year, month)
        ]

        start = datetime(year, month, 1)
        next_year, next_month = shift_month(year, month, 1)
        end = datetime(next_year, next_month, 1)

        by_day: dict[int, list[dict]] = defaultdict(list)
        for row in ConsultService(self.db).consults_between(start, end):
            by_day[datetime.fromisoformat(row["consult_start"]).day].append(row)

        prev_year, prev_month = shift_month(year, month, -1)
        return CalendarMonth(
            year=year,
            month=month,
            month_name=calendar.month_name[month],
            # monthrange counts from Monday
            first_day_of_month=(first_weekday + 1) % 7,
            num_days=num_days,
            weekday_labels=WEEKDAY_LABELS,
            weeks=weeks,
            prev_month=month_ref(prev_year, prev_month),
            next_month=month_ref(next_year, next_month),
            consults=dict(by_day),
        )

    def search_locations(self, search: str) -> list[LocationMatch]:
        return [LocationMatch(**row) for row in LocationService(self.db).search_locations(search)]
