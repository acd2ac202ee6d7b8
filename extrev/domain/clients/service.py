"""Client service - Business logic for client operations"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...cache import cached_query
from ...config import LIST_CACHE_TTL
from ...models import ENTITY_TYPE_CLIENT, Client
from ...options import account_options, option_ids, specialty_options, state_codes, state_options
from ...schemas import FilterOptions, ResponsiveTableData, ValidatedUser
from ...shared.errors import form_error
from ..users.repository import SubscriptionRepository
from .repository import ClientRepository
from .schemas import ClientCreate, ClientFields, ClientFormResponse, ClientResponse, ClientUpdate

logger = logging.getLogger(__name__)


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClientRepository()

    def list_clients(self, opts: FilterOptions, user: ValidatedUser) -> ResponsiveTableData:
        rows = cached_query(self.db, self.repo.list_statement(opts), prefix="list", ttl=LIST_CACHE_TTL)
        subscriptions = SubscriptionRepository.subscribed_slugs(
            self.db, user.user_id, ENTITY_TYPE_CLIENT, Client
        )
        return ResponsiveTableData.build(ENTITY_TYPE_CLIENT, "/client/list", opts, rows, subscriptions)

    def get_client(self, slug: str) -> Client:
        client = self.repo.get_client_by_slug(self.db, slug)
        if not client:
            raise HTTPException(status_code=404, detail="Client not found")
        return client

    def form_options(self) -> dict:
        return {
            "accounts": account_options(self.db),
            "specialties": specialty_options(self.db),
            "states": state_options(self.db),
        }

    def add_form(self) -> ClientFormResponse:
        return ClientFormResponse(header="Add Client", options=self.form_options())

    def edit_form(self, slug: str) -> ClientFormResponse:
        client = self.get_client(slug)
        return ClientFormResponse(
            header="Edit Client",
            entity=ClientResponse.model_validate(client),
            options=self.form_options(),
        )

    def _check_lookups(self, data: ClientFields) -> None:
        if data.state is not None and data.state not in state_codes(self.db):
            raise form_error("client", f"Unknown state: {data.state}")
        if data.account_id is not None and data.account_id not in option_ids(account_options(self.db)):
            raise form_error("client", "Unknown account")
        if data.specialty_id is not None and data.specialty_id not in option_ids(specialty_options(self.db)):
            raise form_error("client", "Unknown specialty")

    def create_client(self, data: ClientCreate, user: ValidatedUser) -> Client:
        logger.info(f"📥 Creating client for user_id: {user.user_id}")
        self._check_lookups(data)

        try:
            client = self.repo.create_client(self.db, **data.model_dump())
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to create client: {e}")
            raise HTTPException(status_code=500, detail="Failed to save client") from e

        logger.info(f"✅ Client {client.id} created")
        return client

    def update_client(self, slug: str, data: ClientUpdate, user: ValidatedUser) -> Client:
        client = self.get_client(slug)
        logger.info(f"📥 Updating client {client.id} for user_id: {user.user_id}")
        self._check_lookups(data)

        updates = data.model_dump(exclude_none=True)
        merged_company = updates.get("company_name", client.company_name)
        merged_first = updates.get("f_name", client.f_name)
        merged_last = updates.get("l_name", client.l_name)
        if not merged_company and not (merged_first and merged_last):
            raise form_error("client", "Either a company name or a first and last name is required")

        try:
            return self.repo.update_client(self.db, client, **updates)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to update client {client.id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to save client") from e
