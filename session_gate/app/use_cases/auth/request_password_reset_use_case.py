"""
Request Password Reset Use Case

Handles generating password reset tokens.
"""

import logging
from datetime import datetime
from typing import Callable

from session_gate.app.repositories.errors import StoreError
from session_gate.app.services.auth_settings import AuthSettings
from session_gate.app.services.reset_token_manager import ResetTokenManager
from session_gate.app.services.unit_of_work import UnitOfWork
from session_gate.domain.base import utc_now
from session_gate.domain.result import Error, Result, Return
from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "If an account exists with this email, a reset link will be sent."


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Cryptographically secure token (32 random bytes, hex encoded)
    - Only the SHA-256 hash of the token is stored
    - Token expires in 1 hour
    - No email enumeration (same response for known and unknown emails)
    - Email delivery happens out of band; the token only appears in the
      response when expose_reset_token is enabled for development
    """

    def __init__(
        self,
        uow: UnitOfWork,
        settings: AuthSettings,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.reset_tokens = ResetTokenManager(uow, settings, clock)
        self.expose_token = settings.expose_reset_token

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: User's email address

        Returns:
            Result with the generic message, or Error(STORE_ERROR)
        """
        async with self.uow:
            try:
                outcome = await self.reset_tokens.request(email)
            except StoreError:
                logger.exception("Password reset request failed in the credential store")
                return Return.err(Error("STORE_ERROR", "Password reset request failed"))

        # NOTE: outcome.token goes to the mail sender here once one exists
        return Return.ok(
            RequestPasswordResetResponse(
                message=GENERIC_MESSAGE,
                token=outcome.token if self.expose_token else None,
            )
        )
