"""Client repository - Database operations for clients"""

from typing import Optional

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from ...models import Client, Specialty
from ...schemas import FilterOptions
from ...shared.listing import apply_list_options

CLIENT_NAME = func.coalesce(Client.company_name, Client.f_name + " " + Client.l_name)

SORT_COLUMNS = {
    "name": CLIENT_NAME,
    "city": Client.city,
    "state": Client.state,
    "created": Client.created_at,
    "updated": Client.updated_at,
}


class ClientRepository:
    """Repository for client database operations"""

    @staticmethod
    def list_statement(opts: FilterOptions) -> Select:
        stmt = select(
            Client.slug,
            CLIENT_NAME.label("client_name"),
            Client.email,
            Client.primary_phone,
            Client.city,
            Client.state,
            Specialty.name.label("specialty_name"),
            Client.created_at,
            Client.updated_at,
        ).outerjoin(Specialty, Specialty.id == Client.specialty_id)
        return apply_list_options(
            stmt,
            opts,
            search_columns=[Client.company_name, Client.f_name, Client.l_name, Client.email, Client.city],
            sort_columns=SORT_COLUMNS,
            default_order=[Client.created_at.desc(), Client.id.desc()],
        )

    @staticmethod
    def get_client_by_slug(db: Session, slug: str) -> Optional[Client]:
        return db.query(Client).filter(Client.slug == slug).first()

    @staticmethod
    def create_client(db: Session, **client_data) -> Client:
        client = Client(**client_data)
        db.add(client)
        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def update_client(db: Session, client: Client, **updates) -> Client:
        """Update a client with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(client, key):
                setattr(client, key, value)

        db.commit()
        db.refresh(client)
        return client
