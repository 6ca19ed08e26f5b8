"""
Reset Token Manager

Generates, validates and consumes single-use password reset tokens.

Token lifecycle: Created -> Used, or Created -> Expired. Expired is never
stored; it is derived from expires_at at the moment of the check.
"""

import hashlib
import logging
import secrets
from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from pydantic import BaseModel

from session_gate.app.repositories.errors import StoreError
from session_gate.app.services.auth_settings import AuthSettings
from session_gate.app.services.unit_of_work import UnitOfWork
from session_gate.domain.base import normalize_email, utc_now
from session_gate.domain.entities import PasswordResetToken
from session_gate.domain.result import Error, Result, Return

logger = logging.getLogger(__name__)


def hash_token(token: str) -> str:
    """Tokens are stored and looked up by SHA-256 digest"""
    return hashlib.sha256(token.encode()).hexdigest()


class ResetRequestOutcome(BaseModel):
    """
    Same shape whether or not the email belongs to an account.

    token is only set for a known account and is meant for out-of-band
    delivery, never for the HTTP response in production.
    """

    token: Optional[str] = None
    expires_at: Optional[datetime] = None


class ValidatedResetToken(BaseModel):
    token_id: UUID
    user_id: UUID


class ResetTokenManager:
    """
    Works inside a unit of work that the caller has already entered.

    request() and consume() commit; validate() only reads.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        settings: AuthSettings,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.ttl = settings.reset_token_ttl
        self.token_bytes = settings.reset_token_bytes
        self.clock = clock

    async def request(self, email: str) -> ResetRequestOutcome:
        """
        Mint a fresh token for the account behind email, if any.

        Earlier tokens for the same user are left untouched and stay subject
        to their own expiry and used checks.

        Raises:
            StoreError: persistence failed
        """
        user = await self.uow.users.get_by_email(normalize_email(email))
        if user is None:
            return ResetRequestOutcome()

        token = secrets.token_hex(self.token_bytes)
        now = self.clock()
        reset_token = PasswordResetToken(
            user_id=user.id,
            token_hash=hash_token(token),
            used=False,
            created_at=now,
            expires_at=now + self.ttl,
        )
        reset_token = await self.uow.password_reset_tokens.create(reset_token)
        await self.uow.commit()

        logger.info(f"Password reset token {reset_token.id} issued for user {user.id}")
        return ResetRequestOutcome(token=token, expires_at=reset_token.expires_at)

    async def validate(self, token: str) -> Result[ValidatedResetToken]:
        """
        Check that token exists, is unused and has not expired.

        Returns:
            Result with the token and owning user ids, or Error
            TOKEN_NOT_FOUND / TOKEN_EXPIRED / TOKEN_USED

        Raises:
            StoreError: persistence failed
        """
        reset_token = await self.uow.password_reset_tokens.get_by_token_hash(hash_token(token))

        if reset_token is None:
            return Return.err(Error("TOKEN_NOT_FOUND", "Invalid reset token"))

        if reset_token.is_expired(self.clock()):
            return Return.err(Error("TOKEN_EXPIRED", "Token has expired"))

        if reset_token.used:
            return Return.err(Error("TOKEN_USED", "Token has already been used"))

        return Return.ok(
            ValidatedResetToken(token_id=reset_token.id, user_id=reset_token.user_id)
        )

    async def consume(
        self, token: str, user_id: UUID, new_password_hash: str
    ) -> Result[None]:
        """
        Set the new password hash and mark the token used, atomically.

        Either both writes are committed or neither is. The token is
        re-validated here so that consume() is safe on its own.

        Returns:
            Result with None, or Error TOKEN_MISMATCH (before any write),
            TOKEN_NOT_FOUND / TOKEN_USED / TOKEN_EXPIRED, STORE_ERROR
        """
        try:
            validated = await self.validate(token)
            if validated.is_err():
                return Return.err(validated.error)

            reset_token = validated.value
            if reset_token.user_id != user_id:
                logger.warning(f"Reset token {reset_token.token_id} presented for another account")
                return Return.err(
                    Error("TOKEN_MISMATCH", "Token does not match the provided email")
                )

            # Mark first: the compare-and-set loses cleanly to a concurrent consumer
            if not await self.uow.password_reset_tokens.mark_used(reset_token.token_id):
                await self.uow.rollback()
                return Return.err(Error("TOKEN_USED", "Token has already been used"))

            if not await self.uow.users.update_password(user_id, new_password_hash):
                await self.uow.rollback()
                return Return.err(Error("TOKEN_NOT_FOUND", "Invalid reset token"))

            await self.uow.commit()
        except StoreError:
            await self.uow.rollback()
            logger.exception(f"Password reset for user {user_id} rolled back")
            return Return.err(Error("STORE_ERROR", "Password could not be updated"))

        logger.info(f"Password reset token {reset_token.token_id} consumed by user {user_id}")
        return Return.ok(None)
