"""Consultant service"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...cache import cached_query
from ...config import LIST_CACHE_TTL
from ...models import ENTITY_TYPE_CONSULTANT, Consultant, User
from ...options import admin_user_options, option_ids, specialty_options, territory_options
from ...schemas import FilterOptions, ResponsiveTableData, ValidatedUser
from ...shared.errors import form_error
from ..users.repository import SubscriptionRepository
from .repository import ConsultantRepository
from .schemas import (
    ConsultantCreate,
    ConsultantFields,
    ConsultantFormResponse,
    ConsultantResponse,
    ConsultantUpdate,
)

logger = logging.getLogger(__name__)


class ConsultantService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ConsultantRepository()

    def list_consultants(self, opts: FilterOptions, user: ValidatedUser) -> ResponsiveTableData:
        rows = cached_query(self.db, self.repo.list_statement(opts), prefix="list", ttl=LIST_CACHE_TTL)
        subscriptions = SubscriptionRepository.subscribed_slugs(
            self.db, user.user_id, ENTITY_TYPE_CONSULTANT, Consultant
        )
        return ResponsiveTableData.build(
            ENTITY_TYPE_CONSULTANT, "/consultant/list", opts, rows, subscriptions
        )

    def get_consultant(self, slug: str) -> Consultant:
        consultant = self.repo.get_consultant_by_slug(self.db, slug)
        if not consultant:
            raise HTTPException(status_code=404, detail="Consultant not found")
        return consultant

    def form_options(self) -> dict:
        return {
            "territories": territory_options(self.db),
            "specialties": specialty_options(self.db),
            "users": admin_user_options(self.db),
        }

    def add_form(self) -> ConsultantFormResponse:
        return ConsultantFormResponse(header="Add Consultant", options=self.form_options())

    def edit_form(self, slug: str) -> ConsultantFormResponse:
        consultant = self.get_consultant(slug)
        return ConsultantFormResponse(
            header="Edit Consultant",
            entity=ConsultantResponse.model_validate(consultant),
            options=self.form_options(),
        )

    def _check_lookups(self, data: ConsultantFields) -> None:
        if data.specialty_id is not None and data.specialty_id not in option_ids(specialty_options(self.db)):
            raise form_error("consultant", "Unknown specialty")
        if data.territory_id is not None and data.territory_id not in option_ids(territory_options(self.db)):
            raise form_error("consultant", "Unknown territory")
        if data.user_id is not None and self.db.get(User, data.user_id) is None:
            raise form_error("consultant", "Unknown user")

    def create_consultant(self, data: ConsultantCreate, user: ValidatedUser) -> Consultant:
        logger.info(f"📥 Creating consultant for user_id: {user.user_id}")
        self._check_lookups(data)

        try:
            consultant = self.repo.create_consultant(self.db, **data.model_dump())
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to create consultant: {e}")
            raise HTTPException(status_code=500, detail="Failed to save consultant") from e

        logger.info(f"✅ Consultant {consultant.id} created")
        return consultant

    def update_consultant(self, slug: str, data: ConsultantUpdate, user: ValidatedUser) -> Consultant:
        consultant = self.get_consultant(slug)
        logger.info(f"📥 Updating consultant {consultant.id} for user_id: {user.user_id}")
        self._check_lookups(data)

        start = data.start_date or consultant.start_date
        end = data.end_date or consultant.end_date
        if start and end and end < start:
            raise form_error("consultant", "End date cannot be before start date")

        try:
            return self.repo.update_consultant(self.db, consultant, **data.model_dump(exclude_none=True))
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to update consultant {consultant.id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to save consultant") from e
