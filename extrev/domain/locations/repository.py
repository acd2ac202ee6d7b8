"""Location repository"""

from typing import Optional

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from ...models import Location, LocationContact
from ...schemas import FilterOptions
from ...shared.listing import apply_list_options

SORT_COLUMNS = {
    "name": Location.name,
    "city": Location.city,
    "state": Location.state,
    "created": Location.created_at,
}


class LocationRepository:
    @staticmethod
    def list_statement(opts: FilterOptions) -> Select:
        stmt = select(
            Location.slug,
            Location.name.label("location_name"),
            Location.address_one,
            Location.city,
            Location.state,
            Location.zip,
            Location.phone,
            LocationContact.name.label("contact_name"),
            Location.created_at,
            Location.updated_at,
        ).outerjoin(LocationContact, LocationContact.id == Location.contact_id)
        return apply_list_options(
            stmt,
            opts,
            search_columns=[Location.name, Location.city, Location.address_one],
            sort_columns=SORT_COLUMNS,
            default_order=[Location.name.asc(), Location.id.asc()],
        )

    @staticmethod
    def search_statement(search: str, limit: int = 10) -> Select:
        return (
            select(Location.slug, Location.name.label("location_name"), Location.city, Location.state)
            .where(Location.name.ilike(f"%{search.strip()}%"))
            .order_by(Location.name)
            .limit(limit)
        )

    @staticmethod
    def get_location_by_slug(db: Session, slug: str) -> Optional[Location]:
        return db.query(Location).filter(Location.slug == slug).first()

    @staticmethod
    def create_location(db: Session, **location_data) -> Location:
        location = Location(**location_data)
        db.add(location)
        db.commit()
        db.refresh(location)
        return location

    @staticmethod
    def update_location(db: Session, location: Location, **updates) -> Location:
        for key, value in updates.items():
            if value is not None and hasattr(location, key):
                setattr(location, key, value)

        db.commit()
        db.refresh(location)
        return location
