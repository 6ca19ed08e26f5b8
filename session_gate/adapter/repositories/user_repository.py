from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from session_gate.app.repositories.errors import StoreError, UniqueViolationError
from session_gate.app.repositories.user_repository import IUserRepository
from session_gate.domain.base import utc_now
from session_gate.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        try:
            result = await self.session.exec(stmt)
            return result.one_or_none()
        except SQLAlchemyError as exc:
            raise StoreError("user lookup by email failed") from exc

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        try:
            result = await self.session.exec(stmt)
            return result.one_or_none()
        except SQLAlchemyError as exc:
            raise StoreError("user lookup by id failed") from exc

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        try:
            await self.session.flush()
            await self.session.refresh(user)
        except IntegrityError as exc:
            raise UniqueViolationError("email already registered") from exc
        except SQLAlchemyError as exc:
            raise StoreError("user insert failed") from exc
        return user

    async def update_password(self, user_id: UUID, password_hash: str) -> bool:
        """Replace the password hash"""
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(password_hash=password_hash, updated_at=utc_now())
        )
        try:
            result = await self.session.execute(stmt)
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise StoreError("password update failed") from exc
        return result.rowcount > 0
