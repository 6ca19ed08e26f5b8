from abc import ABC, abstractmethod

from session_gate.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from session_gate.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management

    Writes made through the repositories become visible only after commit();
    leaving the context without committing rolls everything back.
    """

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    password_reset_tokens: IPasswordResetTokenRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
