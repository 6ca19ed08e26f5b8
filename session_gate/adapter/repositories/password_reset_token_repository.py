from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from session_gate.app.repositories.errors import StoreError
from session_gate.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from session_gate.domain.entities import PasswordResetToken


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    """PasswordResetToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        self.session.add(token)
        try:
            await self.session.flush()
            await self.session.refresh(token)
        except SQLAlchemyError as exc:
            raise StoreError("reset token insert failed") from exc
        return token

    async def get_by_token_hash(self, token_hash: str) -> Optional[PasswordResetToken]:
        """Get password reset token by token hash"""
        stmt = select(PasswordResetToken).where(PasswordResetToken.token_hash == token_hash)
        try:
            result = await self.session.exec(stmt)
            return result.one_or_none()
        except SQLAlchemyError as exc:
            raise StoreError("reset token lookup failed") from exc

    async def mark_used(self, token_id: UUID) -> bool:
        """Mark an unused token as used"""
        stmt = (
            update(PasswordResetToken)
            .where(PasswordResetToken.id == token_id, PasswordResetToken.used == False)  # noqa: E712
            .values(used=True)
        )
        try:
            result = await self.session.execute(stmt)
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise StoreError("reset token update failed") from exc
        return result.rowcount > 0
