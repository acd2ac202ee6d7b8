"""Location router"""

from typing import Annotated

from fastapi import APIRouter, Depends, Form, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...schemas import FilterOptions, MessageResponse, ResponsiveTableData, ValidatedUser
from .schemas import LocationCreate, LocationFormResponse, LocationUpdate
from .service import LocationService

router = APIRouter(prefix="/location", tags=["Locations"])


def get_location_service(db: Session = Depends(get_db)) -> LocationService:
    return LocationService(db)


@router.get("/list", response_model=ResponsiveTableData)
async def list_locations(
    opts: Annotated[FilterOptions, Query()],
    current_user: ValidatedUser = Depends(get_current_user),
    service: LocationService = Depends(get_location_service),
):
    return service.list_locations(opts, current_user)


@router.get("/form", response_model=LocationFormResponse)
async def location_form(
    current_user: ValidatedUser = Depends(get_current_user),
    service: LocationService = Depends(get_location_service),
):
    return service.add_form()


@router.get("/form/{slug}", response_model=LocationFormResponse)
async def location_edit_form(
    slug: str,
    current_user: ValidatedUser = Depends(get_current_user),
    service: LocationService = Depends(get_location_service),
):
    return service.edit_form(slug)


@router.post("/form", status_code=201, response_model=MessageResponse)
async def create_location(
    data: Annotated[LocationCreate, Form()],
    current_user: ValidatedUser = Depends(get_current_user),
    service: LocationService = Depends(get_location_service),
):
    location = service.create_location(data, current_user)
    return MessageResponse(message=f"Location added successfully: {location.name}", slug=location.slug)


@router.patch("/form/{slug}", response_model=MessageResponse)
async def update_location(
    slug: str,
    data: Annotated[LocationUpdate, Form()],
    current_user: ValidatedUser = Depends(get_current_user),
    service: LocationService = Depends(get_location_service),
):
    location = service.update_location(slug, data, current_user)
    return MessageResponse(message=f"Location updated successfully: {location.name}", slug=location.slug)
