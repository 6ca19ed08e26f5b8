"""
Get Current User Use Case

Loads the stored profile of the user behind a verified session.
"""

import logging
from uuid import UUID

from session_gate.app.repositories.errors import StoreError
from session_gate.app.services.unit_of_work import UnitOfWork
from session_gate.app.use_cases.auth.dtos import UserInfo
from session_gate.domain.result import Error, Result, Return

logger = logging.getLogger(__name__)


class GetCurrentUserUseCase:
    """
    Use case for loading the current user.

    Business Rules:
    - The session token has already been verified; this is the only place a
      verified session is followed by a store lookup
    - A token for a user that no longer exists is UNAUTHENTICATED
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str) -> Result[UserInfo]:
        try:
            parsed_id = UUID(user_id)
        except ValueError:
            return Return.err(Error("UNAUTHENTICATED", "Invalid token"))

        async with self.uow:
            try:
                user = await self.uow.users.get_by_id(parsed_id)
            except StoreError:
                logger.exception(f"Loading user {parsed_id} failed in the credential store")
                return Return.err(Error("STORE_ERROR", "User could not be loaded"))

            if user is None:
                return Return.err(Error("UNAUTHENTICATED", "Invalid token"))

            return Return.ok(UserInfo.from_entity(user))
