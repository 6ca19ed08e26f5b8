import pytest
from httpx import ASGITransport, AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from session_gate.app.services.reset_token_manager import hash_token
from session_gate.domain.entities import PasswordResetToken
from tests.utils.client_app import IntegrationConfig, build_client_app

GENERIC = "If an account exists with this email, a reset link will be sent."


async def all_reset_tokens(db_session: AsyncSession):
    result = await db_session.exec(select(PasswordResetToken))
    return result.all()


@pytest.mark.asyncio
async def test_request_reset_for_unknown_email(client: AsyncClient, db_session: AsyncSession):
    """Given no account for bob@x.com
    When I request a reset
    Then I get 200 with the generic message
    And no token row is written
    """
    response = await client.post("/api/auth/request-reset", json={"email": "bob@x.com"})

    assert response.status_code == 200
    assert response.json() == {"message": GENERIC}
    assert await all_reset_tokens(db_session) == []


@pytest.mark.asyncio
async def test_request_reset_for_known_email(client: AsyncClient, db_session: AsyncSession):
    """Known email: identical response, one unused token row expiring in an hour"""
    await client.post("/api/auth/register", json={"email": "alice@x.com", "password": "Aa1!aaaa"})

    response = await client.post("/api/auth/request-reset", json={"email": "alice@x.com"})

    assert response.status_code == 200
    assert response.json() == {"message": GENERIC}

    tokens = await all_reset_tokens(db_session)
    assert len(tokens) == 1
    assert tokens[0].used is False
    assert (tokens[0].expires_at - tokens[0].created_at).total_seconds() == 3600


@pytest.mark.asyncio
async def test_each_request_adds_a_token(client: AsyncClient, db_session: AsyncSession):
    await client.post("/api/auth/register", json={"email": "alice@x.com", "password": "Aa1!aaaa"})

    await client.post("/api/auth/request-reset", json={"email": "alice@x.com"})
    await client.post("/api/auth/request-reset", json={"email": "alice@x.com"})

    tokens = await all_reset_tokens(db_session)
    assert len(tokens) == 2
    assert tokens[0].token_hash != tokens[1].token_hash


@pytest.mark.asyncio
async def test_request_reset_exposes_token_in_development(db_session: AsyncSession):
    class DevConfig(IntegrationConfig):
        EXPOSE_RESET_TOKEN = True

    app = build_client_app(DevConfig, db_session)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as dev:
        await dev.post("/api/auth/register", json={"email": "alice@x.com", "password": "Aa1!aaaa"})
        response = await dev.post("/api/auth/request-reset", json={"email": "alice@x.com"})

    token = response.json()["token"]
    tokens = await all_reset_tokens(db_session)
    assert tokens[0].token_hash == hash_token(token)
