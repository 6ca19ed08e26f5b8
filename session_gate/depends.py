from typing import Optional

from fastapi import Depends, Request, status
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from session_gate.api.error import ClientError
from session_gate.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from session_gate.app.services.auth_settings import AuthSettings
from session_gate.app.services.password_hasher import IPasswordHasher
from session_gate.app.services.session_cookie import SessionCookieFactory
from session_gate.app.services.token_issuer import ITokenIssuer, SessionClaims
from session_gate.app.use_cases.auth import VerifySessionUseCase

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


# Startup-built services live on app.state (see create_app)


def get_auth_settings(request: Request) -> AuthSettings:
    return request.app.state.auth_settings


def get_token_issuer(request: Request) -> ITokenIssuer:
    return request.app.state.token_issuer


def get_password_hasher(request: Request) -> IPasswordHasher:
    return request.app.state.password_hasher


def get_cookie_factory(settings: AuthSettings = Depends(get_auth_settings)) -> SessionCookieFactory:
    return SessionCookieFactory(settings)


def get_session_token(
    request: Request, settings: AuthSettings = Depends(get_auth_settings)
) -> Optional[str]:
    """Raw value of the session cookie, if any"""
    return request.cookies.get(settings.cookie_name)


async def get_current_user(
    token: Optional[str] = Depends(get_session_token),
    token_issuer: ITokenIssuer = Depends(get_token_issuer),
) -> SessionClaims:
    """
    Dependency to extract and verify the session token from its cookie.

    Returns:
        Decoded session claims (user_id, email, iat, exp)

    Raises:
        ClientError: 401 UNAUTHENTICATED if the cookie is missing, invalid or expired
    """
    result = VerifySessionUseCase(token_issuer).execute(token)
    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_401_UNAUTHORIZED)

    return result.value.user
