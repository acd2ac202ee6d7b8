"""
Select-option lists for the entity forms.

Lookup tables change rarely and are cached for a day; lists built from
entity tables (consultants, clients, locations, users) for a few minutes.
"""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .cache import cached_query
from .config import ENTITY_OPTIONS_CACHE_TTL, OPTIONS_CACHE_TTL
from .models import (
    USER_TYPE_ADMIN,
    USER_TYPE_SUBADMIN,
    Account,
    Client,
    Consultant,
    ConsultPurpose,
    ConsultResult,
    Location,
    LocationContact,
    Specialty,
    State,
    Territory,
    User,
)

USER_TYPE_OPTIONS = [
    {"value": 1, "key": "admin"},
    {"value": 2, "key": "subadmin"},
    {"value": 3, "key": "regular"},
    {"value": 4, "key": "guest"},
]


def _lookup_options(db: Session, model) -> list[dict]:
    stmt = select(model.id.label("value"), model.name.label("key")).order_by(model.name)
    return cached_query(db, stmt, prefix="options", ttl=OPTIONS_CACHE_TTL)


def state_options(db: Session) -> list[dict]:
    stmt = select(State.code.label("value"), State.name.label("key")).order_by(State.name)
    rows = cached_query(db, stmt, prefix="options", ttl=OPTIONS_CACHE_TTL)
    return rows or [{"value": "", "key": "Select One"}]


def state_codes(db: Session) -> set[str]:
    return {row["value"] for row in state_options(db) if row["value"]}


def account_options(db: Session) -> list[dict]:
    return _lookup_options(db, Account)


def specialty_options(db: Session) -> list[dict]:
    return _lookup_options(db, Specialty)


def territory_options(db: Session) -> list[dict]:
    return _lookup_options(db, Territory)


def location_contact_options(db: Session) -> list[dict]:
    return _lookup_options(db, LocationContact)


def purpose_options(db: Session) -> list[dict]:
    return _lookup_options(db, ConsultPurpose)


def result_options(db: Session) -> list[dict]:
    return _lookup_options(db, ConsultResult)


def consultant_options(db: Session) -> list[dict]:
    key = (Consultant.f_name + " " + Consultant.l_name).label("key")
    stmt = select(Consultant.id.label("value"), key).order_by(key)
    return cached_query(db, stmt, prefix="options", ttl=ENTITY_OPTIONS_CACHE_TTL)


def client_options(db: Session) -> list[dict]:
    key = func.coalesce(Client.company_name, Client.f_name + " " + Client.l_name).label("key")
    stmt = select(Client.id.label("value"), key).order_by(key)
    return cached_query(db, stmt, prefix="options", ttl=ENTITY_OPTIONS_CACHE_TTL)


def location_options(db: Session) -> list[dict]:
    stmt = select(Location.id.label("value"), Location.name.label("key")).order_by(Location.name)
    return cached_query(db, stmt, prefix="options", ttl=ENTITY_OPTIONS_CACHE_TTL)


def admin_user_options(db: Session) -> list[dict]:
    stmt = (
        select(User.id.label("value"), User.username.label("key"))
        .where(User.user_type_id.in_([USER_TYPE_ADMIN, USER_TYPE_SUBADMIN]))
        .order_by(User.username)
    )
    return cached_query(db, stmt, prefix="options", ttl=ENTITY_OPTIONS_CACHE_TTL)


def option_ids(options: list[dict]) -> set:
    return {option["value"] for option in options}
