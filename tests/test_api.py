from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from storefront.app import create_app
from storefront.routers import cart as cart_router
from storefront.services.checkout_service import CheckoutService
from test_checkout_service import FakeGateway


@pytest.fixture()
def client(temp_db):
    app = create_app()
    app.dependency_overrides[cart_router.get_checkout_service] = lambda: CheckoutService(gateway=FakeGateway())
    with TestClient(app) as test_client:
        yield test_client


def test_signup_sets_http_only_token_cookie(client):
    resp = client.post("/auth/signup", json={"email": "Alice@Example.com", "password": "pw", "name": "Alice"})

    assert resp.status_code == 201
    body = resp.json()
    assert body["email"] == "alice@example.com"
    assert "password_hash" not in body
    cookie = resp.headers["set-cookie"]
    assert cookie.startswith("token=")
    assert "HttpOnly" in cookie
    assert "Max-Age=31536000" in cookie


def test_wrong_password_sets_no_cookie(client):
    client.post("/auth/signup", json={"email": "bob@example.com", "password": "right"})
    client.cookies.clear()

    resp = client.post("/auth/signin", json={"email": "bob@example.com", "password": "wrong"})

    assert resp.status_code == 401
    assert resp.json() == {"error": "InvalidCredentialsError", "message": "Invalid Password!"}
    assert "set-cookie" not in resp.headers


def test_signout_clears_cookie(client):
    client.post("/auth/signup", json={"email": "carol@example.com", "password": "pw"})
    resp = client.post("/auth/signout")

    assert resp.json() == {"message": "Goodbye!"}
    assert 'token=""' in resp.headers["set-cookie"] or "token=;" in resp.headers["set-cookie"]


def test_cart_and_checkout_through_the_cookie(client, make_item):
    client.post("/auth/signup", json={"email": "dave@example.com", "password": "pw"})
    shoes = make_item("Shoes", 1000)
    hat = make_item("Hat", 2500)

    assert client.post(f"/cart/items/{shoes.id}").json()["quantity"] == 1
    assert client.post(f"/cart/items/{shoes.id}").json()["quantity"] == 2
    client.post(f"/cart/items/{hat.id}")

    resp = client.post("/orders", json={"token": "tok_visa"})

    assert resp.status_code == 201
    assert resp.json()["total"] == 4500
    assert len(resp.json()["items"]) == 2


def test_anonymous_cart_mutation_is_rejected(client, make_item):
    resp = client.post(f"/cart/items/{make_item().id}")
    assert resp.status_code == 401
    assert resp.json()["error"] == "AuthenticationError"


def test_forged_cookie_is_anonymous(client, make_item):
    client.cookies.set("token", "forged.token.value")
    resp = client.post(f"/cart/items/{make_item().id}")
    assert resp.status_code == 401
