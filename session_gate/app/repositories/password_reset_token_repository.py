from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from session_gate.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    """PasswordResetToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[PasswordResetToken]:
        """Get password reset token by token hash"""
        pass

    @abstractmethod
    async def mark_used(self, token_id: UUID) -> bool:
        """
        Flip used from False to True.

        Returns False when the token was already used, so two concurrent
        consumers cannot both succeed.
        """
        pass
