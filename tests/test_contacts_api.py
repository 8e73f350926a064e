import pytest
from bson import ObjectId

JOHN = {"name": "John Doe", "email": "john@example.com", "phone": "0501234567"}


@pytest.fixture
def headers(login):
    return login()


def create(client, headers, **overrides):
    response = client.post("/contacts", json={**JOHN, **overrides}, headers=headers)
    assert response.status_code == 201
    return response.json()


def test_contacts_require_auth(client):
    assert client.get("/contacts").status_code == 401
    assert client.post("/contacts", json=JOHN).status_code == 401
    assert client.get(f"/contacts/{ObjectId()}").status_code == 401
    assert client.put(f"/contacts/{ObjectId()}", json=JOHN).status_code == 401
    assert client.patch(f"/contacts/{ObjectId()}/favorite", json={"favorite": True}).status_code == 401
    assert client.delete(f"/contacts/{ObjectId()}").status_code == 401


def test_create_contact(client, headers):
    contact = create(client, headers)
    assert contact["name"] == "John Doe"
    assert contact["email"] == "john@example.com"
    assert contact["phone"] == "0501234567"
    assert contact["favorite"] is False
    assert ObjectId.is_valid(contact["id"])
    assert ObjectId.is_valid(contact["owner"])


def test_create_contact_without_email(client, headers):
    contact = create(client, headers, email=None, phone="+380501234567", favorite=True)
    assert contact["email"] is None
    assert contact["favorite"] is True


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "john doe"},
        {"name": "John"},
        {"phone": "12345"},
        {"email": "not an email"},
        {"favorite": "maybe"},
    ],
)
def test_create_contact_rejects_invalid_fields(client, headers, overrides):
    response = client.post("/contacts", json={**JOHN, **overrides}, headers=headers)
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_create_contact_requires_name_and_phone(client, headers):
    response = client.post("/contacts", json={"email": "john@example.com"}, headers=headers)
    assert response.status_code == 400


def test_get_contact(client, headers):
    contact = create(client, headers)
    response = client.get(f"/contacts/{contact['id']}", headers=headers)
    assert response.status_code == 200
    assert response.json() == contact


@pytest.mark.parametrize("contact_id", [str(ObjectId()), "not-an-object-id"])
def test_get_missing_contact(client, headers, contact_id):
    response = client.get(f"/contacts/{contact_id}", headers=headers)
    assert response.status_code == 404
    assert response.json()["error"] == "Contact not found"


def test_list_contacts_defaults(client, headers):
    create(client, headers)
    response = client.get("/contacts", headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 1
    assert body["page"] == 1
    assert body["limit"] == 10
    assert [c["name"] for c in body["contacts"]] == ["John Doe"]


def test_list_contacts_pagination_clamps_page(client, headers):
    for name in ("Anna Smith", "Bob Brown", "Carl Green"):
        create(client, headers, name=name)

    response = client.get("/contacts", params={"page": 1, "limit": 2}, headers=headers)
    assert [c["name"] for c in response.json()["contacts"]] == ["Anna Smith", "Bob Brown"]

    response = client.get("/contacts", params={"page": 7, "limit": 2}, headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["page"] == 2
    assert body["total"] == 3
    assert [c["name"] for c in body["contacts"]] == ["Carl Green"]


def test_list_contacts_empty_book_stays_on_first_page(client, headers):
    response = client.get("/contacts", params={"page": 3}, headers=headers)
    assert response.status_code == 200
    assert response.json() == {"contacts": [], "total": 0, "page": 1, "limit": 10}


@pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"page": -1, "limit": 5}])
def test_list_contacts_rejects_non_positive_page_or_limit(client, headers, params):
    response = client.get("/contacts", params=params, headers=headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid page or limit"


@pytest.mark.parametrize("limit", [101, 10**19])
def test_list_contacts_rejects_oversized_limit(client, headers, limit):
    response = client.get("/contacts", params={"limit": limit}, headers=headers)
    assert response.status_code == 400
    assert response.json()["details"] == {"max_limit": 100}


def test_list_contacts_accepts_huge_page(client, headers):
    response = client.get("/contacts", params={"page": 10**19}, headers=headers)
    assert response.status_code == 200
    assert response.json()["page"] == 1


def test_list_contacts_filters_by_favorite(client, headers):
    create(client, headers, name="Anna Smith", favorite=True)
    create(client, headers, name="Bob Brown")

    favorites = client.get("/contacts", params={"favorite": "true"}, headers=headers).json()
    assert favorites["total"] == 1
    assert [c["name"] for c in favorites["contacts"]] == ["Anna Smith"]

    others = client.get("/contacts", params={"favorite": "false"}, headers=headers).json()
    assert [c["name"] for c in others["contacts"]] == ["Bob Brown"]


def test_update_contact(client, headers):
    contact = create(client, headers, favorite=True)
    response = client.put(
        f"/contacts/{contact['id']}",
        json={"name": "Jane Doe", "phone": "0671234567"},
        headers=headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Jane Doe"
    assert body["phone"] == "0671234567"
    # Omitted fields keep their stored values
    assert body["email"] == "john@example.com"
    assert body["favorite"] is True


def test_update_contact_validates_body(client, headers):
    contact = create(client, headers)
    response = client.put(f"/contacts/{contact['id']}", json={"name": "Jane Doe"}, headers=headers)
    assert response.status_code == 400


def test_update_missing_contact(client, headers):
    response = client.put(f"/contacts/{ObjectId()}", json=JOHN, headers=headers)
    assert response.status_code == 404


def test_update_favorite_is_idempotent(client, headers):
    contact = create(client, headers)
    url = f"/contacts/{contact['id']}/favorite"

    first = client.patch(url, json={"favorite": True}, headers=headers)
    second = client.patch(url, json={"favorite": True}, headers=headers)
    assert first.status_code == second.status_code == 200
    assert first.json() == second.json()
    assert second.json()["favorite"] is True


def test_update_favorite_requires_flag(client, headers):
    contact = create(client, headers)
    response = client.patch(f"/contacts/{contact['id']}/favorite", json={}, headers=headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Missing field favorite"


def test_update_favorite_missing_contact(client, headers):
    response = client.patch(f"/contacts/{ObjectId()}/favorite", json={"favorite": False}, headers=headers)
    assert response.status_code == 404


def test_delete_contact(client, headers):
    contact = create(client, headers)
    response = client.delete(f"/contacts/{contact['id']}", headers=headers)
    assert response.status_code == 204
    assert response.content == b""

    assert client.get(f"/contacts/{contact['id']}", headers=headers).status_code == 404
    assert client.delete(f"/contacts/{contact['id']}", headers=headers).status_code == 404


def test_contacts_are_isolated_between_owners(client, login):
    alice = login("alice@b.co", "secret1")
    bob = login("bob@b.co", "secret2")
    contact = create(client, alice)
    url = f"/contacts/{contact['id']}"

    assert client.get("/contacts", headers=bob).json()["total"] == 0
    assert client.get(url, headers=bob).status_code == 404
    assert client.put(url, json={**JOHN, "name": "Evil Bob"}, headers=bob).status_code == 404
    assert client.patch(f"{url}/favorite", json={"favorite": True}, headers=bob).status_code == 404
    assert client.delete(url, headers=bob).status_code == 404

    # Untouched for the owner
    response = client.get(url, headers=alice)
    assert response.status_code == 200
    assert response.json() == contact
