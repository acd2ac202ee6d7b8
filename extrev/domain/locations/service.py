"""Location service"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...cache import cached_query
from ...config import LIST_CACHE_TTL
from ...models import ENTITY_TYPE_LOCATION, Location
from ...options import location_contact_options, option_ids, state_codes, state_options
from ...schemas import FilterOptions, ResponsiveTableData, ValidatedUser
from ...shared.errors import form_error
from ..users.repository import SubscriptionRepository
from .repository import LocationRepository
from .schemas import LocationCreate, LocationFields, LocationFormResponse, LocationResponse, LocationUpdate

logger = logging.getLogger(__name__)


class LocationService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = LocationRepository()

    def list_locations(self, opts: FilterOptions, user: ValidatedUser) -> ResponsiveTableData:
        rows = cached_query(self.db, self.repo.list_statement(opts), prefix="list", ttl=LIST_CACHE_TTL)
        subscriptions = SubscriptionRepository.subscribed_slugs(
            self.db, user.user_id, ENTITY_TYPE_LOCATION, Location
        )
        return ResponsiveTableData.build(ENTITY_TYPE_LOCATION, "/location/list", opts, rows, subscriptions)

    def search_locations(self, search: str) -> list[dict]:
        if not search or not search.strip():
            return []
        return cached_query(self.db, self.repo.search_statement(search), prefix="list", ttl=LIST_CACHE_TTL)

    def get_location(self, slug: str) -> Location:
        location = self.repo.get_location_by_slug(self.db, slug)
        if not location:
            raise HTTPException(status_code=404, detail="Location not found")
        return location

    def form_options(self) -> dict:
        return {
            "states": state_options(self.db),
            "contacts": location_contact_options(self.db),
        }

    def add_form(self) -> LocationFormResponse:
        return LocationFormResponse(header="Add Location", options=self.form_options())

    def edit_form(self, slug: str) -> LocationFormResponse:
        location = self.get_location(slug)
        return LocationFormResponse(
            header="Edit Location",
            entity=LocationResponse.model_validate(location),
            options=self.form_options(),
        )

    def _check_lookups(self, data: LocationFields) -> None:
        if data.state is not None and data.state not in state_codes(self.db):
            raise form_error("location", f"Unknown state: {data.state}")
        if data.contact_id is not None and data.contact_id not in option_ids(location_contact_options(self.db)):
            raise form_error("location", "Unknown location contact")

    def create_location(self, data: LocationCreate, user: ValidatedUser) -> Location:
        logger.info(f"📥 Creating location for user_id: {user.user_id}")
        self._check_lookups(data)

        try:
            location = self.repo.create_location(self.db, **data.model_dump())
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to create location: {e}")
            raise HTTPException(status_code=500, detail="Failed to save location") from e

        logger.info(f"✅ Location {location.id} created")
        return location

    def update_location(self, slug: str, data: LocationUpdate, user: ValidatedUser) -> Location:
        location = self.get_location(slug)
        logger.info(f"📥 Updating location {location.id} for user_id: {user.user_id}")
        self._check_lookups(data)

        try:
            return self.repo.update_location(self.db, location, **data.model_dump(exclude_none=True))
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to update location {location.id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to save location") from e
