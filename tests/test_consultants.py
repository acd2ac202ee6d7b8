"""Consultant forms, create/update and list."""

from __future__ import annotations

from fastapi.testclient import TestClient

from conftest import lookup_id, make_consultant
from extrev.models import Specialty, Territory


def _consultant_form(**overrides: str) -> dict:
    form = {
        "f_name": "Maria",
        "l_name": "Lopez",
        "specialty_id": str(lookup_id(Specialty, "Technology")),
        "territory_id": str(lookup_id(Territory, "West")),
        "start_date": "2024-01-15",
    }
    form.update(overrides)
    return form


def test_add_form(auth_client: TestClient) -> None:
    body = auth_client.get("/consultant/form").json()

    assert body["header"] == "Add Consultant"
    assert {"territories", "specialties", "users"} <= set(body["options"])
    assert any(option["key"] == "Northeast" for option in body["options"]["territories"])


def test_edit_form(auth_client: TestClient) -> None:
    greg = make_consultant()

    body = auth_client.get(f"/consultant/form/{greg['slug']}").json()

    assert body["header"] == "Edit Consultant"
    assert body["entity"]["full_name"] == "Greg Cote"


def test_edit_form_unknown_slug(auth_client: TestClient) -> None:
    assert auth_client.get("/consultant/form/nope").status_code == 404


def test_create_consultant(auth_client: TestClient) -> None:
    response = auth_client.post("/consultant/form", data=_consultant_form())

    assert response.status_code == 201
    assert response.json()["message"] == "Consultant added successfully: Maria Lopez"


def test_create_requires_specialty_and_territory(auth_client: TestClient) -> None:
    response = auth_client.post("/consultant/form", data=_consultant_form(specialty_id="", territory_id=""))

    assert response.status_code == 400
    assert "specialty_id" in response.json()["detail"][0]["msg"]
    assert response.headers["HX-Retarget"] == "#consultant_errors"


def test_create_rejects_end_before_start(auth_client: TestClient) -> None:
    response = auth_client.post(
        "/consultant/form", data=_consultant_form(start_date="2024-05-01", end_date="2024-04-30")
    )

    assert response.status_code == 400
    assert response.json()["detail"][0]["msg"] == "End date cannot be before start date"


def test_create_rejects_unknown_territory(auth_client: TestClient) -> None:
    response = auth_client.post("/consultant/form", data=_consultant_form(territory_id="999"))

    assert response.status_code == 400
    assert response.json()["detail"] == "Unknown territory"


def test_update_checks_dates_against_stored_values(auth_client: TestClient) -> None:
    """A PATCH with only an end date is compared to the saved start date."""

    slug = auth_client.post("/consultant/form", data=_consultant_form()).json()["slug"]

    rejected = auth_client.patch(f"/consultant/form/{slug}", data={"end_date": "2023-12-31"})
    accepted = auth_client.patch(f"/consultant/form/{slug}", data={"end_date": "2024-12-31", "l_name": "Lopez-Ruiz"})

    assert rejected.status_code == 400
    assert rejected.json()["detail"] == "End date cannot be before start date"
    assert accepted.status_code == 200
    assert accepted.json()["message"] == "Consultant updated successfully: Maria Lopez-Ruiz"


def test_list_sorted_by_last_name(auth_client: TestClient) -> None:
    make_consultant("Zoe", "Young")
    make_consultant("Adam", "Baker")

    body = auth_client.get("/consultant/list").json()

    assert body["table_title"] == "Consultants"
    assert [row["consultant_name"] for row in body["entities"]] == ["Adam Baker", "Zoe Young"]
    assert body["entities"][0]["specialty_name"] == "Finance"


def test_list_search_by_name(auth_client: TestClient) -> None:
    make_consultant("Zoe", "Young")
    make_consultant("Adam", "Baker")

    body = auth_client.get("/consultant/list", params={"search": "you"}).json()

    assert [row["consultant_name"] for row in body["entities"]] == ["Zoe Young"]
