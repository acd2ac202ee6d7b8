"""Consult service - appointments and their attachments"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...cache import cached_query
from ...config import LIST_CACHE_TTL
from ...models import ENTITY_TYPE_CONSULT, Client, Consult, ConsultAttachment, Consultant, Location
from ...options import (
    client_options,
    consultant_options,
    location_options,
    option_ids,
    purpose_options,
    result_options,
)
from ...schemas import FilterOptions, ResponsiveTableData, ValidatedUser
from ...shared.errors import form_error
from ...storage import ATTACHMENT_TYPES, delete_upload, save_upload
from ..users.repository import SubscriptionRepository
from .repository import ConsultRepository
from .schemas import ConsultCreate, ConsultFields, ConsultFormResponse, ConsultResponse, ConsultUpdate

logger = logging.getLogger(__name__)


class ConsultService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ConsultRepository()

    def list_consults(self, opts: FilterOptions, user: ValidatedUser) -> ResponsiveTableData:
        rows = cached_query(self.db, self.repo.list_statement(opts), prefix="list", ttl=LIST_CACHE_TTL)
        subscriptions = SubscriptionRepository.subscribed_slugs(
            self.db, user.user_id, ENTITY_TYPE_CONSULT, Consult
        )
        return ResponsiveTableData.build(ENTITY_TYPE_CONSULT, "/consult/list", opts, rows, subscriptions)

    def consults_between(self, start: datetime, end: datetime) -> list[dict]:
        return cached_query(
            self.db, self.repo.between_statement(start, end), prefix="calendar", ttl=LIST_CACHE_TTL
        )

    def get_consult(self, slug: str) -> Consult:
        consult = self.repo.get_consult_by_slug(self.db, slug)
        if not consult:
            raise HTTPException(status_code=404, detail="Consult not found")
        return consult

    def form_options(self) -> dict:
        return {
            "locations": location_options(self.db),
            "consultants": consultant_options(self.db),
            "clients": client_options(self.db),
            "purposes": purpose_options(self.db),
            "results": result_options(self.db),
        }

    def add_form(self) -> ConsultFormResponse:
        return ConsultFormResponse(header="Add Consult", options=self.form_options())

    def edit_form(self, slug: str) -> ConsultFormResponse:
        consult = self.get_consult(slug)
        return ConsultFormResponse(
            header="Edit Consult",
            entity=ConsultResponse.model_validate(consult),
            options=self.form_options(),
        )

    def _check_references(self, data: ConsultFields) -> None:
        # Entity option lists are cached, so check new references against the database
        for model, value, label in (
            (Consultant, data.consultant_id, "consultant"),
            (Client, data.client_id, "client"),
            (Location, data.location_id, "location"),
        ):
            if value is not None and not self.repo.exists(self.db, model, value):
                raise form_error("consult", f"Unknown {label}")

        if data.consult_purpose_id is not None and data.consult_purpose_id not in option_ids(purpose_options(self.db)):
            raise form_error("consult", "Unknown consult purpose")
        if data.consult_result_id is not None and data.consult_result_id not in option_ids(result_options(self.db)):
            raise form_error("consult", "Unknown consult result")

    def create_consult(self, data: ConsultCreate, user: ValidatedUser) -> Consult:
        logger.info(f"📥 Creating consult for user_id: {user.user_id}")
        self._check_references(data)

        try:
            consult = self.repo.create_consult(self.db, **data.entity_fields())
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to create consult: {e}")
            raise HTTPException(status_code=500, detail="Failed to save consult") from e

        logger.info(f"✅ Consult {consult.id} created")
        return consult

    def update_consult(self, slug: str, data: ConsultUpdate, user: ValidatedUser) -> Consult:
        consult = self.get_consult(slug)
        logger.info(f"📥 Updating consult {consult.id} for user_id: {user.user_id}")
        self._check_references(data)

        updates = data.entity_fields()
        start = updates.get("consult_start", consult.consult_start)
        end = updates.get("consult_end", consult.consult_end)
        if end <= start:
            raise form_error("consult", "Consult must end after it starts")

        try:
            return self.repo.update_consult(self.db, consult, **updates)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to update consult {consult.id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to save consult") from e

    def list_attachments(self, slug: str) -> list[ConsultAttachment]:
        return self.repo.get_attachments(self.db, self.get_consult(slug))

    async def add_attachment(
        self, slug: str, file: UploadFile, short_desc: Optional[str], user: ValidatedUser
    ) -> ConsultAttachment:
        consult = self.get_consult(slug)
        stored = await save_upload(file, f"consults/{consult.slug}", ATTACHMENT_TYPES)

        try:
            attachment = self.repo.add_attachment(
                self.db,
                consult_id=consult.id,
                short_desc=(short_desc or "").strip() or None,
                mime_type=stored.mime_type,
                path=stored.path,
                size=stored.size,
                uploaded_by=user.user_id,
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            delete_upload(stored.path)
            logger.error(f"❌ Failed to record attachment for consult {consult.id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to save attachment") from e

        logger.info(f"✅ Attachment {attachment.id} added to consult {consult.id}")
        return attachment
