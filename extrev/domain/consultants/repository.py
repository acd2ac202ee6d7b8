"""Consultant repository"""

from typing import Optional

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from ...models import Consultant, Specialty, Territory
from ...schemas import FilterOptions
from ...shared.listing import apply_list_options

FULL_NAME = Consultant.f_name + " " + Consultant.l_name

SORT_COLUMNS = {
    "name": FULL_NAME,
    "specialty": Specialty.name,
    "territory": Territory.name,
    "start": Consultant.start_date,
    "created": Consultant.created_at,
}


class ConsultantRepository:
    @staticmethod
    def list_statement(opts: FilterOptions) -> Select:
        stmt = (
            select(
                Consultant.slug,
                FULL_NAME.label("consultant_name"),
                Specialty.name.label("specialty_name"),
                Territory.name.label("territory_name"),
                Consultant.start_date,
                Consultant.end_date,
                Consultant.img_path,
                Consultant.created_at,
                Consultant.updated_at,
            )
            .join(Specialty, Specialty.id == Consultant.specialty_id)
            .join(Territory, Territory.id == Consultant.territory_id)
        )
        return apply_list_options(
            stmt,
            opts,
            search_columns=[Consultant.f_name, Consultant.l_name, Specialty.name, Territory.name],
            sort_columns=SORT_COLUMNS,
            default_order=[Consultant.l_name.asc(), Consultant.f_name.asc(), Consultant.id.asc()],
        )

    @staticmethod
    def get_consultant_by_slug(db: Session, slug: str) -> Optional[Consultant]:
        return db.query(Consultant).filter(Consultant.slug == slug).first()

    @staticmethod
    def create_consultant(db: Session, **consultant_data) -> Consultant:
        consultant = Consultant(**consultant_data)
        db.add(consultant)
        db.commit()
        db.refresh(consultant)
        return consultant

    @staticmethod
    def update_consultant(db: Session, consultant: Consultant, **updates) -> Consultant:
        for key, value in updates.items():
            if value is not None and hasattr(consultant, key):
                setattr(consultant, key, value)

        db.commit()
        db.refresh(consultant)
        return consultant
