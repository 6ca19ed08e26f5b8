"""
Use Cases

Organized into domain folders:
- auth/: Registration, login, logout, session verification, password reset
- users/: Current user profile
"""

from .auth import (
    RegisterUseCase,
    LoginUseCase,
    LogoutUseCase,
    VerifySessionUseCase,
    RequestPasswordResetUseCase,
    ResetPasswordUseCase,
)
from .users import GetCurrentUserUseCase

__all__ = [
    # Auth
    "RegisterUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "VerifySessionUseCase",
    "RequestPasswordResetUseCase",
    "ResetPasswordUseCase",
    # Users
    "GetCurrentUserUseCase",
]
