from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from session_gate.adapter.services.bcrypt_password_hasher import BcryptPasswordHasher
from session_gate.adapter.services.jwt_token_issuer import JwtTokenIssuer
from session_gate.app.services.auth_settings import AuthSettings
from session_gate.app.services.session_cookie import SessionCookieFactory


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Mock repositories
    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.create = AsyncMock()
    uow.users.update_password = AsyncMock(return_value=True)

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.password_reset_tokens.get_by_token_hash = AsyncMock()
    uow.password_reset_tokens.mark_used = AsyncMock(return_value=True)

    return uow


@pytest.fixture
def settings():
    return AuthSettings(
        jwt_secret="unit-test-secret",
        session_lifetime=timedelta(hours=24),
        bcrypt_rounds=4,
    )


@pytest.fixture
def hasher(settings):
    return BcryptPasswordHasher(settings.bcrypt_rounds)


@pytest.fixture
def token_issuer(settings):
    return JwtTokenIssuer(settings)


@pytest.fixture
def cookies(settings):
    return SessionCookieFactory(settings)
