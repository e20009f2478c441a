"""Integration tests for the HTTP API via TestClient."""

import pytest
from fastapi.testclient import TestClient

from storefront.api import create_app
from storefront.data.database import get_db
from storefront.data.models.user import UserModel
from storefront.data.transaction import get_coordinator
from storefront.utils.settings import DEFAULT_AVATAR_URL


@pytest.fixture
def client(run_transaction, session_factory):
    app = create_app()

    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_coordinator] = lambda: run_transaction
    app.dependency_overrides[get_db] = _get_db
    return TestClient(app)


def _register(client, name="Alice", email="alice@example.com", password="secret"):
    response = client.post("/api/users", json={"name": name, "email": email, "password": password})
    assert response.status_code == 201
    return response.json()


def _auth(body):
    return {"Authorization": f"Bearer {body['token']}"}


@pytest.fixture
def admin_headers(client, run_transaction):
    body = _register(client, name="Admin", email="admin@example.com")

    def promote(db):
        db.get(UserModel, body["id"]).is_admin = True

    run_transaction(promote)
    return _auth(body)


def _order_payload(product_id, qty):
    return {
        "order_items": [{"product_id": product_id, "qty": qty}],
        "shipping_address": {
            "address": "1 Main Street",
            "city": "Springfield",
            "postal_code": "12345",
            "country": "US",
        },
        "payment_method": "Paypal",
        "items_price": "199.99",
        "tax_price": "0",
        "shipping_price": "0",
        "total_price": "199.99",
    }


class TestHealthCheck:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestUsersApi:
    def test_register_returns_tokens_and_default_avatar(self, client):
        body = _register(client)

        assert body["name"] == "Alice"
        assert body["avatar_url"] == DEFAULT_AVATAR_URL
        assert body["token"]
        assert body["refresh_token"]
        assert "password" not in body

    def test_register_duplicate_email(self, client):
        _register(client, name="A", email="a@x.com")

        response = client.post("/api/users", json={"name": "B", "email": "a@x.com", "password": "pw2"})

        assert response.status_code == 400
        assert response.json()["kind"] == "DuplicateEmail"

    def test_login_and_profile(self, client):
        _register(client)

        login = client.post("/api/users/login", json={"email": "alice@example.com", "password": "secret"})
        assert login.status_code == 200

        profile = client.get("/api/users/profile", headers=_auth(login.json()))
        assert profile.status_code == 200
        assert profile.json()["email"] == "alice@example.com"

    def test_update_profile(self, client):
        headers = _auth(_register(client))

        response = client.put(
            "/api/users/profile",
            json={"name": "Alicia", "email": "alicia@example.com", "password": "changed"},
            headers=headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Alicia"
        assert body["email"] == "alicia@example.com"
        assert body["token"]
        assert "password" not in body

        old = client.post("/api/users/login", json={"email": "alicia@example.com", "password": "secret"})
        assert old.status_code == 401
        new = client.post("/api/users/login", json={"email": "alicia@example.com", "password": "changed"})
        assert new.status_code == 200

    def test_update_profile_duplicate_email(self, client):
        _register(client, name="A", email="a@x.com")
        headers = _auth(_register(client, name="B", email="b@x.com"))

        response = client.put("/api/users/profile", json={"email": "a@x.com"}, headers=headers)

        assert response.status_code == 400
        assert response.json()["kind"] == "DuplicateEmail"

    def test_bad_login(self, client):
        response = client.post("/api/users/login", json={"email": "nobody@x.com", "password": "pw"})
        assert response.status_code == 401
        assert response.json()["kind"] == "Unauthorized"

    def test_requires_token(self, client):
        assert client.get("/api/users/profile").status_code == 401
        bad = client.get("/api/users/profile", headers={"Authorization": "Bearer garbage"})
        assert bad.status_code == 401

    def test_admin_only_endpoints(self, client):
        body = _register(client)

        response = client.get("/api/users", headers=_auth(body))

        assert response.status_code == 403
        assert response.json()["kind"] == "Forbidden"

    def test_admin_disable_restore_delete(self, client, admin_headers):
        user = _register(client, name="Bob", email="bob@example.com")

        disabled = client.patch(f"/api/users/{user['id']}/disable", headers=admin_headers)
        assert disabled.status_code == 200
        assert disabled.json()["is_disabled"] is True

        listed = client.get("/api/users/disabled", headers=admin_headers)
        assert [u["id"] for u in listed.json()] == [user["id"]]

        restored = client.patch(f"/api/users/{user['id']}/restore", headers=admin_headers)
        assert restored.json()["is_disabled"] is False

        deleted = client.delete(f"/api/users/{user['id']}", headers=admin_headers)
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "User has been deleted"}

        missing = client.delete(f"/api/users/{user['id']}", headers=admin_headers)
        assert missing.status_code == 404
        assert missing.json()["kind"] == "NotFound"


class TestOrdersApi:
    def test_create_and_read_order(self, client, make_product):
        pid = make_product(name="Keyboard", price="199.99", count_in_stock=5)
        headers = _auth(_register(client))

        created = client.post("/api/orders", json=_order_payload(pid, 2), headers=headers)

        assert created.status_code == 201
        order = created.json()
        assert order["is_paid"] is False
        assert order["order_items"][0]["name"] == "Keyboard"
        assert order["order_items"][0]["qty"] == 2
        assert order["shipping_address"]["city"] == "Springfield"

        fetched = client.get(f"/api/orders/{order['id']}", headers=headers)
        assert fetched.status_code == 200
        assert fetched.json()["id"] == order["id"]

        mine = client.get("/api/orders", headers=headers)
        assert [o["id"] for o in mine.json()] == [order["id"]]

    def test_empty_order(self, client):
        headers = _auth(_register(client))
        payload = _order_payload(1, 1)
        payload["order_items"] = []

        response = client.post("/api/orders", json=payload, headers=headers)

        assert response.status_code == 400
        assert response.json() == {"kind": "EmptyOrder", "detail": "No order items"}

    def test_malformed_body_is_validation_error(self, client, make_product):
        headers = _auth(_register(client))
        payload = _order_payload(make_product(), 1)
        del payload["shipping_address"]

        response = client.post("/api/orders", json=payload, headers=headers)

        assert response.status_code == 422
        body = response.json()
        assert body["kind"] == "ValidationError"
        assert any("shipping_address" in error["loc"] for error in body["detail"])

    def test_insufficient_stock(self, client, make_product):
        pid = make_product(count_in_stock=1)
        headers = _auth(_register(client))

        response = client.post("/api/orders", json=_order_payload(pid, 2), headers=headers)

        assert response.status_code == 400
        assert response.json()["kind"] == "InsufficientStock"

    def test_pay_and_deliver(self, client, make_product, admin_headers):
        pid = make_product(count_in_stock=5)
        headers = _auth(_register(client))
        order_id = client.post("/api/orders", json=_order_payload(pid, 1), headers=headers).json()["id"]

        paid = client.patch(
            f"/api/orders/{order_id}/pay",
            json={"id": "PAY-1", "status": "COMPLETED", "update_time": "now", "email_address": "a@x.com"},
            headers=headers,
        )
        assert paid.status_code == 200
        assert paid.json()["is_paid"] is True
        assert paid.json()["payment_result"]["id"] == "PAY-1"

        assert client.patch(f"/api/orders/{order_id}/delivered", headers=headers).status_code == 403
        delivered = client.patch(f"/api/orders/{order_id}/delivered", headers=admin_headers)
        assert delivered.json()["is_delivered"] is True

        everything = client.get("/api/orders/all", headers=admin_headers)
        assert everything.json()[0]["user"]["name"] == "Alice"

    def test_other_users_order_is_forbidden(self, client, make_product):
        pid = make_product(count_in_stock=5)
        owner = _auth(_register(client))
        stranger = _auth(_register(client, name="Eve", email="eve@example.com"))
        order_id = client.post("/api/orders", json=_order_payload(pid, 1), headers=owner).json()["id"]

        assert client.get(f"/api/orders/{order_id}", headers=stranger).status_code == 403

    def test_unknown_order(self, client):
        headers = _auth(_register(client))
        response = client.patch("/api/orders/999/pay", json={}, headers=headers)
        assert response.status_code == 404
