from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from session_gate.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer

    Implementations raise StoreError on failure and UniqueViolationError
    when create() collides with an existing email.
    """

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by normalized email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update_password(self, user_id: UUID, password_hash: str) -> bool:
        """Replace the password hash, returns False if the user is gone"""
        pass
