"""Consult scheduling, list and attachments."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError

from conftest import lookup_id, make_client, make_consult, make_consultant, make_location
from extrev import storage
from extrev.config import UPLOAD_DIR
from extrev.database import SessionLocal
from extrev.domain.consults.repository import ConsultRepository
from extrev.models import Consult, ConsultPurpose


@pytest.fixture
def parties() -> dict:
    return {
        "consultant": make_consultant(),
        "client": make_client(),
        "location": make_location(),
    }


def _consult_form(parties: dict, **overrides: str) -> dict:
    form = {
        "consultant_id": str(parties["consultant"]["id"]),
        "client_id": str(parties["client"]["id"]),
        "location_id": str(parties["location"]["id"]),
        "start_date": "2024-03-05",
        "start_time": "09:00",
        "end_time": "10:30",
        "notes": "Kickoff meeting",
    }
    form.update(overrides)
    return form


def _saved(slug: str) -> Consult:
    db = SessionLocal()
    try:
        return db.query(Consult).filter(Consult.slug == slug).one()
    finally:
        db.close()


def test_add_form_lists_every_option_group(auth_client: TestClient, parties: dict) -> None:
    body = auth_client.get("/consult/form").json()

    assert body["header"] == "Add Consult"
    assert set(body["options"]) == {"locations", "consultants", "clients", "purposes", "results"}
    assert body["options"]["consultants"] == [{"value": parties["consultant"]["id"], "key": "Greg Cote"}]


def test_create_consult_defaults_end_date_to_start(auth_client: TestClient, parties: dict) -> None:
    response = auth_client.post(
        "/consult/form",
        data=_consult_form(parties, consult_purpose_id=str(lookup_id(ConsultPurpose, "Sales"))),
    )

    assert response.status_code == 201
    assert response.json()["message"] == "Consult added successfully"
    consult = _saved(response.json()["slug"])
    assert consult.consult_start == datetime(2024, 3, 5, 9, 0)
    assert consult.consult_end == datetime(2024, 3, 5, 10, 30)


def test_create_overnight_consult(auth_client: TestClient, parties: dict) -> None:
    response = auth_client.post(
        "/consult/form",
        data=_consult_form(parties, start_time="22:00", end_date="2024-03-06", end_time="01:00"),
    )

    assert response.status_code == 201
    assert _saved(response.json()["slug"]).consult_end == datetime(2024, 3, 6, 1, 0)


def test_create_rejects_end_before_start(auth_client: TestClient, parties: dict) -> None:
    response = auth_client.post("/consult/form", data=_consult_form(parties, end_time="08:00"))

    assert response.status_code == 400
    assert response.json()["detail"][0]["msg"] == "Consult must end after it starts"
    assert response.headers["HX-Retarget"] == "#consult_errors"


def test_create_requires_start_time(auth_client: TestClient, parties: dict) -> None:
    response = auth_client.post("/consult/form", data=_consult_form(parties, start_time=""))

    assert response.status_code == 400
    assert response.json()["detail"][0]["msg"] == "Start needs both a date and a time"


def test_create_rejects_unknown_client(auth_client: TestClient, parties: dict) -> None:
    response = auth_client.post("/consult/form", data=_consult_form(parties, client_id="999"))

    assert response.status_code == 400
    assert response.json()["detail"] == "Unknown client"


def test_create_accepts_entity_added_after_options_were_cached(
    auth_client: TestClient, parties: dict
) -> None:
    auth_client.get("/consult/form")
    newcomer = make_location("Late Addition")

    response = auth_client.post(
        "/consult/form", data=_consult_form(parties, location_id=str(newcomer["id"]))
    )

    assert response.status_code == 201


def test_edit_form_and_update(auth_client: TestClient, parties: dict) -> None:
    consult = make_consult(
        parties["consultant"], parties["client"], parties["location"], datetime(2024, 3, 5, 9, 0)
    )

    form = auth_client.get(f"/consult/form/{consult['slug']}").json()
    response = auth_client.patch(f"/consult/form/{consult['slug']}", data={"notes": "Moved agenda"})

    assert form["header"] == "Edit Consult"
    assert form["entity"]["consult_start"] == "2024-03-05T09:00:00"
    assert response.status_code == 200
    assert _saved(consult["slug"]).notes == "Moved agenda"


def test_update_checks_times_against_stored_values(auth_client: TestClient, parties: dict) -> None:
    consult = make_consult(
        parties["consultant"], parties["client"], parties["location"], datetime(2024, 3, 5, 9, 0)
    )

    response = auth_client.patch(
        f"/consult/form/{consult['slug']}", data={"start_date": "2024-03-05", "start_time": "11:00"}
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Consult must end after it starts"


def test_update_unknown_consult(auth_client: TestClient) -> None:
    assert auth_client.patch("/consult/form/missing", data={"notes": "Nothing"}).status_code == 404


def test_list_newest_first_with_names(auth_client: TestClient, parties: dict) -> None:
    for day in (1, 2, 3):
        make_consult(parties["consultant"], parties["client"], parties["location"], datetime(2024, 3, day, 9))

    body = auth_client.get("/consult/list", params={"limit": 3}).json()

    assert body["table_title"] == "Consults"
    assert [row["consult_start"] for row in body["entities"]] == [
        "2024-03-03T09:00:00",
        "2024-03-02T09:00:00",
        "2024-03-01T09:00:00",
    ]
    assert body["entities"][0]["client_name"] == "Acme Corp"
    assert body["next_page_url"] == "/consult/list?page=2&limit=3"


def test_upload_and_list_attachments(auth_client: TestClient, parties: dict) -> None:
    consult = make_consult(
        parties["consultant"], parties["client"], parties["location"], datetime(2024, 3, 5, 9, 0)
    )

    response = auth_client.post(
        f"/consult/attachments/{consult['slug']}",
        files={"file": ("agenda.txt", b"1. Introductions", "text/plain")},
        data={"short_desc": "Agenda"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["short_desc"] == "Agenda"
    assert body["size"] == len(b"1. Introductions")
    assert body["path"].startswith(f"consults/{consult['slug']}/")
    assert (Path(UPLOAD_DIR) / body["path"]).read_bytes() == b"1. Introductions"

    listed = auth_client.get(f"/consult/attachments/{consult['slug']}").json()
    assert [item["slug"] for item in listed] == [body["slug"]]


@pytest.mark.parametrize(
    "upload",
    [
        ("agenda|v2.txt", b"x", "text/plain"),
        ("agenda.exe", b"x", "application/x-msdownload"),
        ("agenda.pdf", b"x", "text/plain"),
    ],
)
def test_attachment_rejects_unsafe_files(auth_client: TestClient, parties: dict, upload: tuple) -> None:
    consult = make_consult(
        parties["consultant"], parties["client"], parties["location"], datetime(2024, 3, 5, 9, 0)
    )

    response = auth_client.post(f"/consult/attachments/{consult['slug']}", files={"file": upload})

    assert response.status_code == 400


def test_attachment_too_large(
    auth_client: TestClient, parties: dict, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(storage, "MAX_UPLOAD_SIZE", 4)
    consult = make_consult(
        parties["consultant"], parties["client"], parties["location"], datetime(2024, 3, 5, 9, 0)
    )

    response = auth_client.post(
        f"/consult/attachments/{consult['slug']}",
        files={"file": ("agenda.txt", b"too big", "text/plain")},
    )

    assert response.status_code == 413


def test_attachment_unknown_consult(auth_client: TestClient) -> None:
    response = auth_client.post(
        "/consult/attachments/missing", files={"file": ("agenda.txt", b"x", "text/plain")}
    )

    assert response.status_code == 404


def test_attachment_file_removed_when_row_fails(
    auth_client: TestClient, parties: dict, monkeypatch: pytest.MonkeyPatch
) -> None:
    """No file is left behind without a row pointing at it."""

    def failing_insert(db, **attachment_data):
        raise SQLAlchemyError("database unavailable")

    monkeypatch.setattr(ConsultRepository, "add_attachment", staticmethod(failing_insert))
    consult = make_consult(
        parties["consultant"], parties["client"], parties["location"], datetime(2024, 3, 5, 9, 0)
    )

    response = auth_client.post(
        f"/consult/attachments/{consult['slug']}",
        files={"file": ("agenda.txt", b"1. Introductions", "text/plain")},
    )

    assert response.status_code == 500
    assert list((Path(UPLOAD_DIR) / "consults" / consult["slug"]).glob("*")) == []
