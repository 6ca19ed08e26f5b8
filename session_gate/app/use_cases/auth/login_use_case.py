"""
Login Use Case

Authenticates a user and issues a cookie-held session token.
"""

import logging

from session_gate.app.repositories.errors import StoreError
from session_gate.app.services.password_hasher import IPasswordHasher
from session_gate.app.services.session_cookie import SessionCookieFactory
from session_gate.app.services.token_issuer import ITokenIssuer
from session_gate.app.services.unit_of_work import UnitOfWork
from session_gate.domain.base import normalize_email
from session_gate.domain.result import Error, Result, Return
from .dtos import LoginResult, UserInfo

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login and session token issuance.

    Business Rules:
    - Unknown email and wrong password return the same INVALID_CREDENTIALS
    - A password comparison always runs, even when no user matches, so both
      failures take comparable time
    - Session token expires one session lifetime after issuance
    - Nothing is written; the session lives only in the signed token
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: IPasswordHasher,
        token_issuer: ITokenIssuer,
        cookies: SessionCookieFactory,
    ):
        self.uow = uow
        self.hasher = hasher
        self.token_issuer = token_issuer
        self.cookies = cookies

    async def execute(self, email: str, password: str) -> Result[LoginResult]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with LoginResult (user, token, cookie instruction), or Error
        """
        invalid = Error("INVALID_CREDENTIALS", "Invalid email or password")

        async with self.uow:
            try:
                user = await self.uow.users.get_by_email(normalize_email(email))
            except StoreError:
                logger.exception("Login lookup failed in the credential store")
                return Return.err(Error("STORE_ERROR", "Login failed"))

            # Constant-time password verification (prevent timing attacks)
            if user is None:
                self.hasher.matches(password, self.hasher.timing_hash)
                logger.info("Login rejected: invalid credentials")
                return Return.err(invalid)

            if not self.hasher.matches(password, user.password_hash):
                logger.info("Login rejected: invalid credentials")
                return Return.err(invalid)

            session_token = self.token_issuer.issue(str(user.id), {"email": user.email})
            logger.info(f"User {user.id} logged in")

            return Return.ok(
                LoginResult(
                    user=UserInfo.from_entity(user),
                    session_token=session_token,
                    cookie=self.cookies.issue(session_token),
                )
            )
