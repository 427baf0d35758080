import pytest
from httpx import AsyncClient

from tests.utils.cookies import session_cookie_header, session_cookie_value


@pytest.mark.asyncio
async def test_successful_signup(client: AsyncClient, test_data):
    """Signup creates the account, returns it and sets a session cookie"""
    payload = test_data.get_copy("signup_alice")

    response = await client.post("/api/auth/signup", json=payload)

    assert response.status_code == 201
    data = response.json()
    assert data["user"]["username"] == "alice_01"
    assert data["user"]["email"] == "alice@example.com"
    assert data["user"]["bio"] is None
    assert "id" in data["user"]
    assert "password_hash" not in data["user"]

    cookie = response.headers["set-cookie"]
    assert "HttpOnly" in cookie
    assert "Max-Age=2592000" in cookie

    me = await client.get(
        "/api/auth/me", headers=session_cookie_header(session_cookie_value(response))
    )
    assert me.json()["user"]["id"] == data["user"]["id"]


@pytest.mark.asyncio
async def test_signup_username_taken_ignores_case(client: AsyncClient, test_data):
    await client.post("/api/auth/signup", json=test_data.get_copy("signup_alice"))

    response = await client.post(
        "/api/auth/signup", json=test_data.payload("signup_bob", username="ALICE_01")
    )

    assert response.status_code == 409
    error = response.json()["error"]
    assert error["code"] == "USERNAME_TAKEN"
    assert error["field"] == "username"


@pytest.mark.asyncio
async def test_signup_email_taken_ignores_case(client: AsyncClient, test_data):
    await client.post("/api/auth/signup", json=test_data.get_copy("signup_alice"))

    response = await client.post(
        "/api/auth/signup", json=test_data.payload("signup_bob", email="Alice@Example.com")
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "EMAIL_TAKEN"
    assert response.json()["error"]["field"] == "email"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"username": "ab"},
        {"username": "a" * 21},
        {"username": "bad name!"},
        {"email": "not-an-email"},
        {"password": "short"},
    ],
)
async def test_signup_invalid_input(client: AsyncClient, test_data, overrides):
    response = await client.post(
        "/api/auth/signup", json=test_data.payload("signup_alice", **overrides)
    )

    assert response.status_code == 422
