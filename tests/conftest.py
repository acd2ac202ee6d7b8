"""Shared fixtures: in-memory SQLite, fakeredis and logged-in clients."""

from __future__ import annotations

import os
import tempfile
from datetime import datetime, timedelta
from typing import Any

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CSRF_ENABLED"] = "false"
os.environ["COOKIE_SECURE"] = "false"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="extrev-uploads-")

import fakeredis  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from extrev import cache as cache_module  # noqa: E402
from extrev import rate_limiter  # noqa: E402
from extrev.config import SESSION_COOKIE_NAME  # noqa: E402
from extrev.database import Base, SessionLocal, engine  # noqa: E402
from extrev.main import app  # noqa: E402
from extrev.models import (  # noqa: E402
    USER_TYPE_ADMIN,
    USER_TYPE_REGULAR,
    Client,
    Consult,
    Consultant,
    Location,
    Specialty,
    Territory,
    User,
    UserSession,
    UserSettings,
)
from extrev.security_utils import generate_session_token, hash_password_bcrypt  # noqa: E402
from extrev.seed import seed_lookups  # noqa: E402

DEFAULT_PASSWORD = "Secret123!"


@pytest.fixture(autouse=True)
def fake_redis(monkeypatch: pytest.MonkeyPatch) -> fakeredis.FakeRedis:
    """Every test gets an empty Redis."""

    client = fakeredis.FakeRedis(decode_responses=True)
    monkeypatch.setattr(rate_limiter, "redis_client", client)
    monkeypatch.setattr(cache_module.cache, "redis_client", client)
    return client


@pytest.fixture(autouse=True)
def database() -> Any:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_lookups(db)
    finally:
        db.close()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session() -> Any:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def _save(obj: Any) -> dict[str, Any]:
    db = SessionLocal()
    try:
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return {"id": obj.id, "slug": getattr(obj, "slug", None)}
    finally:
        db.close()


def lookup_id(model: Any, name: str) -> int:
    db = SessionLocal()
    try:
        return db.query(model).filter(model.name == name).one().id
    finally:
        db.close()


def make_user(
    username: str = "alice",
    user_type_id: int = USER_TYPE_REGULAR,
    email: str | None = None,
    password: str = DEFAULT_PASSWORD,
) -> dict[str, Any]:
    user = User(
        username=username,
        email=email or f"{username}@example.com",
        password_hash=hash_password_bcrypt(password),
        user_type_id=user_type_id,
    )
    user.settings = UserSettings()
    return _save(user)


def make_session(user_id: int, expires: datetime | None = None, logout: bool = False) -> str:
    token = generate_session_token()
    _save(
        UserSession(
            session_id=token,
            user_id=user_id,
            expires=expires or datetime.utcnow() + timedelta(days=14),
            logout=logout,
        )
    )
    return token


def make_consultant(f_name: str = "Greg", l_name: str = "Cote") -> dict[str, Any]:
    return _save(
        Consultant(
            f_name=f_name,
            l_name=l_name,
            specialty_id=lookup_id(Specialty, "Finance"),
            territory_id=lookup_id(Territory, "Northeast"),
        )
    )


def make_client(company_name: str | None = "Acme Corp", **overrides: Any) -> dict[str, Any]:
    fields = {
        "company_name": company_name,
        "address_one": "12 Main St",
        "city": "Boston",
        "state": "MA",
        "zip": "02110",
    }
    fields.update(overrides)
    return _save(Client(**fields))


def make_location(name: str = "Harbor Office") -> dict[str, Any]:
    return _save(
        Location(name=name, address_one="1 Harbor Dr", city="Boston", state="MA", zip="02110")
    )


def make_consult(
    consultant: dict[str, Any],
    client: dict[str, Any],
    location: dict[str, Any],
    start: datetime,
    hours: int = 1,
) -> dict[str, Any]:
    return _save(
        Consult(
            consultant_id=consultant["id"],
            client_id=client["id"],
            location_id=location["id"],
            consult_start=start,
            consult_end=start + timedelta(hours=hours),
            notes="Quarterly review",
        )
    )


def login_as(test_client: TestClient, user: dict[str, Any]) -> TestClient:
    test_client.cookies.set(SESSION_COOKIE_NAME, make_session(user["id"]))
    return test_client


@pytest.fixture
def user() -> dict[str, Any]:
    return make_user("alice")


@pytest.fixture
def admin() -> dict[str, Any]:
    return make_user("rootadmin", user_type_id=USER_TYPE_ADMIN)


@pytest.fixture
def auth_client(client: TestClient, user: dict[str, Any]) -> TestClient:
    return login_as(client, user)


@pytest.fixture
def admin_client(admin: dict[str, Any]) -> TestClient:
    return login_as(TestClient(app), admin)
