"""Client list, forms and create/update."""

from __future__ import annotations

from fastapi.testclient import TestClient

from conftest import lookup_id, make_client
from extrev.database import SessionLocal
from extrev.models import Account, Client


def _client_form(**overrides: str) -> dict:
    form = {
        "company_name": "Initech",
        "address_one": "40 Office Park Dr",
        "city": "Austin",
        "state": "tx",
        "zip": "73301",
        "primary_phone": "(512) 555-0199",
        "email": "Billing@Initech.com",
    }
    form.update(overrides)
    return form


def test_list_requires_session(client: TestClient) -> None:
    assert client.get("/client/list").status_code == 401


def test_add_form_has_options(auth_client: TestClient) -> None:
    response = auth_client.get("/client/form")

    body = response.json()
    assert response.status_code == 200
    assert body["header"] == "Add Client"
    assert body.get("entity") is None
    assert {"accounts", "specialties", "states"} <= set(body["options"])
    assert {"value": "MA", "key": "Massachusetts"} in body["options"]["states"]


def test_edit_form_loads_client(auth_client: TestClient) -> None:
    acme = make_client("Acme Corp")

    body = auth_client.get(f"/client/form/{acme['slug']}").json()

    assert body["header"] == "Edit Client"
    assert body["entity"]["display_name"] == "Acme Corp"
    assert body["entity"]["slug"] == acme["slug"]


def test_edit_form_unknown_slug(auth_client: TestClient) -> None:
    assert auth_client.get("/client/form/does-not-exist").status_code == 404


def test_create_client_normalises_fields(auth_client: TestClient) -> None:
    response = auth_client.post(
        "/client/form", data=_client_form(account_id=str(lookup_id(Account, "Enterprise")))
    )

    assert response.status_code == 201
    assert response.json()["message"] == "Client added successfully: Initech"

    db = SessionLocal()
    try:
        saved = db.query(Client).filter(Client.slug == response.json()["slug"]).one()
        assert saved.state == "TX"
        assert saved.primary_phone == "+15125550199"
        assert saved.email == "billing@initech.com"
    finally:
        db.close()


def test_create_person_client(auth_client: TestClient) -> None:
    response = auth_client.post(
        "/client/form", data=_client_form(company_name="", f_name="Jane", l_name="Doe")
    )

    assert response.status_code == 201
    assert response.json()["message"] == "Client added successfully: Jane Doe"


def test_create_requires_a_name(auth_client: TestClient) -> None:
    response = auth_client.post("/client/form", data=_client_form(company_name="", f_name="Jane"))

    assert response.status_code == 400
    assert response.headers["HX-Retarget"] == "#client_errors"


def test_create_rejects_bad_address(auth_client: TestClient) -> None:
    response = auth_client.post("/client/form", data=_client_form(address_one="40 Office Park"))

    assert response.status_code == 400
    assert response.json()["detail"][0]["field"] == "address_one"


def test_create_rejects_unknown_state(auth_client: TestClient) -> None:
    response = auth_client.post("/client/form", data=_client_form(state="ZZ"))

    assert response.status_code == 400
    assert response.json()["detail"] == "Unknown state: ZZ"
    assert response.headers["HX-Retarget"] == "#client_errors"


def test_update_client_keeps_blank_fields(auth_client: TestClient) -> None:
    acme = make_client("Acme Corp")

    response = auth_client.patch(
        f"/client/form/{acme['slug']}", data={"city": "Cambridge", "address_one": "", "zip": ""}
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Client updated successfully: Acme Corp"
    db = SessionLocal()
    try:
        saved = db.query(Client).filter(Client.slug == acme["slug"]).one()
        assert saved.city == "Cambridge"
        assert saved.address_one == "12 Main St"
        assert saved.updated_at is not None
    finally:
        db.close()


def test_update_unknown_client(auth_client: TestClient) -> None:
    assert auth_client.patch("/client/form/missing", data={"city": "Cambridge"}).status_code == 404


def test_list_pages_and_next_url(auth_client: TestClient) -> None:
    for n in range(3):
        make_client(f"Company {n}")

    first = auth_client.get("/client/list", params={"limit": 2}).json()
    last = auth_client.get("/client/list", params={"limit": 2, "page": 2}).json()

    assert first["table_title"] == "Clients"
    assert first["vec_len"] == 2
    assert first["next_page_url"] == "/client/list?page=2&limit=2"
    assert last["vec_len"] == 1
    assert last["next_page_url"] is None


def test_list_search_and_sort(auth_client: TestClient) -> None:
    make_client("Zeta Labs")
    make_client("Alpha Works")
    make_client("Beta Alpha")

    found = auth_client.get("/client/list", params={"search": "alpha", "key": "name", "dir": "asc"}).json()
    names = [row["client_name"] for row in found["entities"]]

    assert names == ["Alpha Works", "Beta Alpha"]


def test_list_rejects_bad_paging(auth_client: TestClient) -> None:
    assert auth_client.get("/client/list", params={"page": 0}).status_code == 400
    assert auth_client.get("/client/list", params={"limit": 500}).status_code == 400


def test_list_marks_subscriptions(auth_client: TestClient) -> None:
    acme = make_client("Acme Corp")
    auth_client.post(f"/user/subscribe/7/{acme['slug']}")

    body = auth_client.get("/client/list").json()

    assert body["subscriptions"] == [acme["slug"]]
