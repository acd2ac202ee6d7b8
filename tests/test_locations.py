"""Location forms, create/update and list."""

from __future__ import annotations

from fastapi.testclient import TestClient

from conftest import make_location


def _location_form(**overrides: str) -> dict:
    form = {
        "name": "Downtown Center",
        "address_one": "200 Market St",
        "address_two": "Suite 300",
        "city": "Denver",
        "state": "CO",
        "zip": "80202",
        "phone": "303.555.0142",
    }
    form.update(overrides)
    return form


def test_add_form(auth_client: TestClient) -> None:
    body = auth_client.get("/location/form").json()

    assert body["header"] == "Add Location"
    assert [option["key"] for option in body["options"]["contacts"]] == ["Location Admin", "Site Manager"]


def test_edit_form(auth_client: TestClient) -> None:
    harbor = make_location()

    body = auth_client.get(f"/location/form/{harbor['slug']}").json()

    assert body["header"] == "Edit Location"
    assert body["entity"]["name"] == "Harbor Office"


def test_create_location(auth_client: TestClient) -> None:
    response = auth_client.post("/location/form", data=_location_form())

    assert response.status_code == 201
    assert response.json()["message"] == "Location added successfully: Downtown Center"


def test_create_rejects_short_name(auth_client: TestClient) -> None:
    response = auth_client.post("/location/form", data=_location_form(name="HQ"))

    assert response.status_code == 400
    assert response.headers["HX-Retarget"] == "#location_errors"


def test_create_rejects_bad_secondary_address(auth_client: TestClient) -> None:
    response = auth_client.post("/location/form", data=_location_form(address_two="Floor 3"))

    assert response.status_code == 400
    assert response.json()["detail"][0]["field"] == "address_two"


def test_create_requires_zip(auth_client: TestClient) -> None:
    response = auth_client.post("/location/form", data=_location_form(zip=""))

    assert response.status_code == 400
    assert "zip" in response.json()["detail"][0]["msg"]


def test_update_location(auth_client: TestClient) -> None:
    harbor = make_location()

    response = auth_client.patch(f"/location/form/{harbor['slug']}", data={"name": "Harbor Annex"})

    assert response.status_code == 200
    assert response.json()["message"] == "Location updated successfully: Harbor Annex"


def test_update_unknown_location(auth_client: TestClient) -> None:
    assert auth_client.patch("/location/form/missing", data={"name": "Nowhere"}).status_code == 404


def test_list_sorted_by_city_desc(auth_client: TestClient) -> None:
    make_location("Harbor Office")
    auth_client.post("/location/form", data=_location_form())

    body = auth_client.get("/location/list", params={"key": "city", "dir": "desc"}).json()

    assert body["table_title"] == "Locations"
    assert [row["city"] for row in body["entities"]] == ["Denver", "Boston"]
    assert body["next_page_url"] is None


def test_unknown_sort_key_falls_back_to_name(auth_client: TestClient) -> None:
    make_location("Zenith Hall")
    make_location("Atrium Place")

    body = auth_client.get("/location/list", params={"key": "password_hash"}).json()

    assert [row["location_name"] for row in body["entities"]] == ["Atrium Place", "Zenith Hall"]
