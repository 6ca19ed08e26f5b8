"""
Reset Password Use Case

Sets a new password using a reset token and the account's email.
"""

import logging
from datetime import datetime
from typing import Callable

from session_gate.app.repositories.errors import StoreError
from session_gate.app.services.auth_settings import AuthSettings
from session_gate.app.services.password_hasher import IPasswordHasher
from session_gate.app.services.password_policy import PasswordPolicy
from session_gate.app.services.reset_token_manager import ResetTokenManager
from session_gate.app.services.unit_of_work import UnitOfWork
from session_gate.domain.base import normalize_email, utc_now
from session_gate.domain.result import Error, Result, Return
from .dtos import ResetPasswordCommand, ResetPasswordResponse

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Use case for confirming a password reset.

    Business Rules:
    - New password must satisfy the password policy
    - Token must exist, be unused, and not be expired
    - Token must belong to the account behind the provided email,
      otherwise TOKEN_MISMATCH and nothing is written
    - Password update and token consumption commit together
    - Existing session tokens are not revoked (stateless sessions)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        settings: AuthSettings,
        hasher: IPasswordHasher,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.policy = PasswordPolicy(settings)
        self.hasher = hasher
        self.reset_tokens = ResetTokenManager(uow, settings, clock)

    async def execute(self, command: ResetPasswordCommand) -> Result[ResetPasswordResponse]:
        """
        Execute reset password use case.

        Args:
            command: token from the reset link, account email, new password

        Returns:
            Result with confirmation message, or Error

        Errors:
            - VALIDATION_ERROR: new password does not meet the policy
            - TOKEN_NOT_FOUND: no token with this value
            - TOKEN_USED: token was already consumed
            - TOKEN_EXPIRED: token is past its expiry
            - TOKEN_MISMATCH: token belongs to another account
            - STORE_ERROR: persistence failed, nothing was changed
        """
        password_check = self.policy.validate(command.new_password)
        if password_check.is_err():
            return Return.err(password_check.error)

        async with self.uow:
            try:
                validated = await self.reset_tokens.validate(command.token)
                if validated.is_err():
                    return Return.err(validated.error)

                user = await self.uow.users.get_by_email(normalize_email(command.email))
            except StoreError:
                logger.exception("Password reset lookup failed in the credential store")
                return Return.err(Error("STORE_ERROR", "Password could not be updated"))

            if user is None or user.id != validated.value.user_id:
                return Return.err(
                    Error("TOKEN_MISMATCH", "Token does not match the provided email")
                )

            new_password_hash = self.hasher.hash(command.new_password)
            consumed = await self.reset_tokens.consume(command.token, user.id, new_password_hash)
            if consumed.is_err():
                return Return.err(consumed.error)

        return Return.ok(ResetPasswordResponse(message="Password updated successfully"))
