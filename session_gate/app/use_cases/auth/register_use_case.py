import logging

from session_gate.app.repositories.errors import StoreError, UniqueViolationError
from session_gate.app.services.auth_settings import AuthSettings
from session_gate.app.services.password_hasher import IPasswordHasher
from session_gate.app.services.password_policy import PasswordPolicy
from session_gate.app.services.unit_of_work import UnitOfWork
from session_gate.domain.base import normalize_email, sanitize_input
from session_gate.domain.entities import User
from session_gate.domain.result import Error, Result, Return
from .dtos import RegisterCommand, RegisterResponse, UserInfo

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand (validated business intent)
    - Output: Result[RegisterResponse] (structured response)

    Business Logic:
    1. Normalize email (lower-case, trimmed) and strip markup from email and name
    2. Enforce the password policy
    3. Check if email already exists
    4. Hash password with bcrypt
    5. Create User; a unique-constraint violation at write time is the same
       DUPLICATE_EMAIL as the pre-check (two concurrent registrations)
    6. Commit and return the user without its hash
    """

    def __init__(self, uow: UnitOfWork, settings: AuthSettings, hasher: IPasswordHasher):
        self.uow = uow
        self.policy = PasswordPolicy(settings)
        self.hasher = hasher

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with email, password, optional name

        Returns:
            Result[RegisterResponse] with the created user
            or Error(VALIDATION_ERROR | DUPLICATE_EMAIL | STORE_ERROR)
        """
        email = normalize_email(command.email)
        if not email:
            return Return.err(Error("VALIDATION_ERROR", "Email is required"))

        name = sanitize_input(command.name).strip() if command.name else None

        password_check = self.policy.validate(command.password)
        if password_check.is_err():
            return Return.err(password_check.error)

        duplicate = Error("DUPLICATE_EMAIL", "User already exists")

        async with self.uow:
            try:
                existing_user = await self.uow.users.get_by_email(email)
                if existing_user:
                    return Return.err(duplicate)

                user = User(
                    email=email,
                    password_hash=self.hasher.hash(command.password),
                    name=name or None,
                )
                user = await self.uow.users.create(user)
                await self.uow.commit()
            except UniqueViolationError:
                logger.info("Registration lost a race on a duplicate email")
                return Return.err(duplicate)
            except StoreError:
                logger.exception("Registration failed in the credential store")
                return Return.err(Error("STORE_ERROR", "Registration failed"))

            logger.info(f"User {user.id} registered")
            return Return.ok(RegisterResponse(user=UserInfo.from_entity(user)))
