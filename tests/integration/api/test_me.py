import pytest
from httpx import AsyncClient

from session_gate.adapter.services.jwt_token_issuer import JwtTokenIssuer
from tests.utils.session_cookie import register_and_login, use_session


@pytest.mark.asyncio
async def test_me_returns_stored_profile(client: AsyncClient):
    await register_and_login(client, email="alice@x.com")

    response = await client.get("/api/users/me")

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["email"] == "alice@x.com"
    assert "password_hash" not in user


@pytest.mark.asyncio
async def test_me_for_deleted_user_is_401(client: AsyncClient, auth_settings):
    """A validly signed token whose subject no longer exists"""
    use_session(client, JwtTokenIssuer(auth_settings).issue("00000000-0000-0000-0000-000000000000"))

    response = await client.get("/api/users/me")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHENTICATED"
