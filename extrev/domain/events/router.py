"""Event router - consult calendar and location lookup"""

from datetime import date

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...schemas import ValidatedUser
from .schemas import CalendarMonth, LocationMatch
from .service import EventService

router = APIRouter(prefix="/event", tags=["Events"])


def get_event_service(db: Session = Depends(get_db)) -> EventService:
    return EventService(db)


@router.get("/calendar", response_model=CalendarMonth)
async def current_month(
    current_user: ValidatedUser = Depends(get_current_user),
    service: EventService = Depends(get_event_service),
):
    today = date.today()
    return service.calendar_month(today.year, today.month)


@router.get("/calendar/{year}/{month}", response_model=CalendarMonth)
async def calendar_month(
    year: int = Path(..., ge=1970, le=2200),
    month: int = Path(..., ge=1, le=12),
    current_user: ValidatedUser = Depends(get_current_user),
    service: EventService = Depends(get_event_service),
):
    return service.calendar_month(year, month)


@router.get("/locations", response_model=list[LocationMatch])
async def search_locations(
    search: str = Query("", max_length=36),
    current_user: ValidatedUser = Depends(get_current_user),
    service: EventService = Depends(get_event_service),
):
    return service.search_locations(search)
