"""Consult repository"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from ...models import (
    Client,
    Consult,
    ConsultAttachment,
    Consultant,
    ConsultPurpose,
    ConsultResult,
    Location,
)
from ...schemas import FilterOptions
from ...shared.listing import apply_list_options

CONSULTANT_NAME = Consultant.f_name + " " + Consultant.l_name
CLIENT_NAME = func.coalesce(Client.company_name, Client.f_name + " " + Client.l_name)

SORT_COLUMNS = {
    "start": Consult.consult_start,
    "end": Consult.consult_end,
    "consultant": CONSULTANT_NAME,
    "client": CLIENT_NAME,
    "location": Location.name,
    "created": Consult.created_at,
}


def consult_rows() -> Select:
    """Consults joined to the names a table or calendar shows"""
    return (
        select(
            Consult.slug,
            CONSULTANT_NAME.label("consultant_name"),
            CLIENT_NAME.label("client_name"),
            Location.name.label("location_name"),
            ConsultPurpose.name.label("purpose_name"),
            ConsultResult.name.label("result_name"),
            Consult.consult_start,
            Consult.consult_end,
            Consult.notes,
            Consult.created_at,
            Consult.updated_at,
        )
        .join(Consultant, Consultant.id == Consult.consultant_id)
        .join(Client, Client.id == Consult.client_id)
        .join(Location, Location.id == Consult.location_id)
        .outerjoin(ConsultPurpose, ConsultPurpose.id == Consult.consult_purpose_id)
        .outerjoin(ConsultResult, ConsultResult.id == Consult.consult_result_id)
    )


class ConsultRepository:
    @staticmethod
    def list_statement(opts: FilterOptions) -> Select:
        return apply_list_options(
            consult_rows(),
            opts,
            search_columns=[
                Consult.notes,
                Location.name,
                Client.company_name,
                Client.f_name,
                Client.l_name,
                Consultant.f_name,
                Consultant.l_name,
            ],
            sort_columns=SORT_COLUMNS,
            default_order=[Consult.consult_start.desc(), Consult.id.desc()],
        )

    @staticmethod
    def between_statement(start: datetime, end: datetime) -> Select:
        return (
            consult_rows()
            .where(Consult.consult_start >= start, Consult.consult_start < end)
            .order_by(Consult.consult_start, Consult.id)
        )

    @staticmethod
    def get_consult_by_slug(db: Session, slug: str) -> Optional[Consult]:
        return db.query(Consult).filter(Consult.slug == slug).first()

    @staticmethod
    def exists(db: Session, model, entity_id: int) -> bool:
        return db.get(model, entity_id) is not None

    @staticmethod
    def create_consult(db: Session, **consult_data) -> Consult:
        consult = Consult(**consult_data)
        db.add(consult)
        db.commit()
        db.refresh(consult)
        return consult

    @staticmethod
    def update_consult(db: Session, consult: Consult, **updates) -> Consult:
        for key, value in updates.items():
            if value is not None and hasattr(consult, key):
                setattr(consult, key, value)

        db.commit()
        db.refresh(consult)
        return consult

    @staticmethod
    def get_attachments(db: Session, consult: Consult) -> list[ConsultAttachment]:
        return (
            db.query(ConsultAttachment)
            .filter(ConsultAttachment.consult_id == consult.id)
            .order_by(ConsultAttachment.created_at, ConsultAttachment.id)
            .all()
        )

    @staticmethod
    def add_attachment(db: Session, **attachment_data) -> ConsultAttachment:
        attachment = ConsultAttachment(**attachment_data)
        db.add(attachment)
        db.commit()
        db.refresh(attachment)
        return attachment
