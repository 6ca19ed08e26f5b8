"""
Unit tests for LoginUseCase
"""
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from session_gate.app.use_cases.auth.login_use_case import LoginUseCase
from session_gate.domain.entities import User


@pytest.fixture
def user(hasher):
    return User(
        id=uuid4(),
        email="alice@x.com",
        password_hash=hasher.hash("Aa1!aaaa"),
        name="Alice",
    )


@pytest.mark.asyncio
async def test_successful_login(mock_uow, hasher, token_issuer, cookies, user):
    """Login issues a verifiable session token and an HTTP-only cookie"""
    # Arrange
    mock_uow.users.get_by_email.return_value = user
    use_case = LoginUseCase(mock_uow, hasher, token_issuer, cookies)

    # Act
    result = await use_case.execute("ALICE@x.com", "Aa1!aaaa")

    # Assert
    assert result.is_ok()
    data = result.value
    assert data.user.email == "alice@x.com"

    claims = token_issuer.verify(data.session_token)
    assert claims.is_ok()
    assert claims.value.user_id == str(user.id)

    assert data.cookie.key == "token"
    assert data.cookie.value == data.session_token
    assert data.cookie.httponly is True
    assert data.cookie.path == "/"
    assert data.cookie.samesite == "lax"
    assert data.cookie.max_age == 24 * 60 * 60

    mock_uow.users.get_by_email.assert_called_once_with("alice@x.com")
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_login_wrong_password_and_unknown_email_are_indistinguishable(
    mock_uow, hasher, token_issuer, cookies, user
):
    use_case = LoginUseCase(mock_uow, hasher, token_issuer, cookies)

    mock_uow.users.get_by_email.return_value = user
    wrong_password = await use_case.execute("alice@x.com", "Wrong1!pass")

    mock_uow.users.get_by_email.return_value = None
    unknown_email = await use_case.execute("nobody@x.com", "Aa1!aaaa")

    assert wrong_password.is_err() and unknown_email.is_err()
    assert wrong_password.error == unknown_email.error
    assert wrong_password.error.code == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_login_unknown_email_still_compares_a_hash(mock_uow, token_issuer, cookies):
    """Timing: a bcrypt comparison runs even when no user matches"""
    hasher = MagicMock()
    hasher.timing_hash = "dummy-hash"
    hasher.matches.return_value = False
    mock_uow.users.get_by_email.return_value = None

    use_case = LoginUseCase(mock_uow, hasher, token_issuer, cookies)
    result = await use_case.execute("nobody@x.com", "Aa1!aaaa")

    assert result.error.code == "INVALID_CREDENTIALS"
    hasher.matches.assert_called_once_with("Aa1!aaaa", "dummy-hash")
