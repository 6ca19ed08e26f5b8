"""
Integration tests for password reset confirmation

- Successful reset, then login with the new password
- Second use of the same token fails with TOKEN_USED
- Expired token fails with TOKEN_EXPIRED
- Token presented with another account's email fails with TOKEN_MISMATCH
  and changes nothing
"""
import secrets
from datetime import timedelta

import bcrypt
import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from session_gate.app.services.reset_token_manager import hash_token
from session_gate.domain.base import utc_now
from session_gate.domain.entities import PasswordResetToken, User

OLD_PASSWORD = "OldPass1!"
NEW_PASSWORD = "NewSecure1!"


async def create_user_with_reset_token(
    db_session: AsyncSession,
    email: str = "alice@x.com",
    expired: bool = False,
    used: bool = False,
) -> tuple[User, str]:
    """
    Helper creating a user with a password reset token.

    Returns:
        Tuple of (User, plain_token)
    """
    user = User(
        email=email,
        password_hash=bcrypt.hashpw(OLD_PASSWORD.encode(), bcrypt.gensalt(4)).decode(),
    )
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)

    plain_token = secrets.token_hex(32)
    now = utc_now()
    expires_at = now - timedelta(hours=2) if expired else now + timedelta(minutes=30)

    db_session.add(
        PasswordResetToken(
            user_id=user.id,
            token_hash=hash_token(plain_token),
            used=used,
            created_at=expires_at - timedelta(hours=1),
            expires_at=expires_at,
        )
    )
    await db_session.commit()

    return user, plain_token


async def stored_token(db_session: AsyncSession, plain_token: str) -> PasswordResetToken:
    stmt = select(PasswordResetToken).where(PasswordResetToken.token_hash == hash_token(plain_token))
    result = await db_session.exec(stmt)
    token = result.one()
    await db_session.refresh(token)
    return token


@pytest.mark.asyncio
async def test_successful_password_reset(client: AsyncClient, db_session: AsyncSession):
    """Given a valid reset token
    When I reset with my email and a new password
    Then the password changes, the token is used
    And I can log in with the new password but not the old one
    """
    user, plain_token = await create_user_with_reset_token(db_session)

    response = await client.post("/api/auth/reset-password", json={
        "token": plain_token, "email": "alice@x.com", "new_password": NEW_PASSWORD
    })

    assert response.status_code == 200
    assert response.json() == {"message": "Password updated successfully"}

    assert (await stored_token(db_session, plain_token)).used is True

    new_login = await client.post("/api/auth/login", json={
        "email": "alice@x.com", "password": NEW_PASSWORD
    })
    old_login = await client.post("/api/auth/login", json={
        "email": "alice@x.com", "password": OLD_PASSWORD
    })
    assert new_login.status_code == 200
    assert old_login.status_code == 401


@pytest.mark.asyncio
async def test_token_cannot_be_used_twice(client: AsyncClient, db_session: AsyncSession):
    _, plain_token = await create_user_with_reset_token(db_session)
    payload = {"token": plain_token, "email": "alice@x.com", "new_password": NEW_PASSWORD}

    first = await client.post("/api/auth/reset-password", json=payload)
    second = await client.post("/api/auth/reset-password", json={**payload, "new_password": "Other2@pass"})

    assert first.status_code == 200
    assert second.status_code == 400
    assert second.json()["error"]["code"] == "TOKEN_USED"


@pytest.mark.asyncio
async def test_expired_token(client: AsyncClient, db_session: AsyncSession):
    _, plain_token = await create_user_with_reset_token(db_session, expired=True)

    response = await client.post("/api/auth/reset-password", json={
        "token": plain_token, "email": "alice@x.com", "new_password": NEW_PASSWORD
    })

    assert response.status_code == 400
    data = response.json()
    assert data["error"]["code"] == "TOKEN_EXPIRED"
    assert data["error"]["message"] == "Token has expired"


@pytest.mark.asyncio
async def test_unknown_token(client: AsyncClient):
    response = await client.post("/api/auth/reset-password", json={
        "token": secrets.token_hex(32), "email": "alice@x.com", "new_password": NEW_PASSWORD
    })

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "TOKEN_NOT_FOUND"


@pytest.mark.asyncio
async def test_token_for_another_account(client: AsyncClient, db_session: AsyncSession):
    """Mismatched email/token owner fails and performs no mutation"""
    alice, plain_token = await create_user_with_reset_token(db_session, email="alice@x.com")
    mallory, _ = await create_user_with_reset_token(db_session, email="mallory@x.com")
    mallory_hash = mallory.password_hash

    response = await client.post("/api/auth/reset-password", json={
        "token": plain_token, "email": "mallory@x.com", "new_password": NEW_PASSWORD
    })

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "TOKEN_MISMATCH"

    assert (await stored_token(db_session, plain_token)).used is False
    await db_session.refresh(mallory)
    assert mallory.password_hash == mallory_hash


@pytest.mark.asyncio
async def test_weak_new_password(client: AsyncClient, db_session: AsyncSession):
    _, plain_token = await create_user_with_reset_token(db_session)

    response = await client.post("/api/auth/reset-password", json={
        "token": plain_token, "email": "alice@x.com", "new_password": "weakpass"
    })

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert (await stored_token(db_session, plain_token)).used is False


@pytest.mark.asyncio
async def test_full_flow_from_request_to_reset(client: AsyncClient, db_session: AsyncSession, monkeypatch):
    """Request a token, capture it at the delivery boundary, and reset"""
    import session_gate.app.services.reset_token_manager as manager_module

    issued = []
    real_token_hex = manager_module.secrets.token_hex

    def capture_token_hex(nbytes):
        token = real_token_hex(nbytes)
        issued.append(token)
        return token

    monkeypatch.setattr(manager_module.secrets, "token_hex", capture_token_hex)

    await client.post("/api/auth/register", json={"email": "alice@x.com", "password": "Aa1!aaaa"})
    await client.post("/api/auth/request-reset", json={"email": "alice@x.com"})
    assert len(issued) == 1

    response = await client.post("/api/auth/reset-password", json={
        "token": issued[0], "email": "alice@x.com", "new_password": NEW_PASSWORD
    })

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_new_password_longer_than_bcrypt_accepts(client: AsyncClient, db_session: AsyncSession):
    _, plain_token = await create_user_with_reset_token(db_session)

    response = await client.post("/api/auth/reset-password", json={
        "token": plain_token, "email": "alice@x.com", "new_password": "Aa1!" + "a" * 76
    })

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert (await stored_token(db_session, plain_token)).used is False


@pytest.mark.asyncio
async def test_used_and_expired_token_reports_expired(client: AsyncClient, db_session: AsyncSession):
    _, plain_token = await create_user_with_reset_token(db_session, expired=True, used=True)

    response = await client.post("/api/auth/reset-password", json={
        "token": plain_token, "email": "alice@x.com", "new_password": NEW_PASSWORD
    })

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "TOKEN_EXPIRED"
