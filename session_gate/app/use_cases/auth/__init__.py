"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .verify_session_use_case import VerifySessionUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .dtos import (
    RegisterCommand,
    ResetPasswordCommand,
    UserInfo,
    RegisterResponse,
    LoginResult,
    LoginResponse,
    LogoutResult,
    VerifySessionResponse,
    RequestPasswordResetResponse,
    ResetPasswordResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "VerifySessionUseCase",
    "RequestPasswordResetUseCase",
    "ResetPasswordUseCase",
    # DTOs - Commands
    "RegisterCommand",
    "ResetPasswordCommand",
    # DTOs - Responses
    "RegisterResponse",
    "LoginResult",
    "LoginResponse",
    "LogoutResult",
    "VerifySessionResponse",
    "RequestPasswordResetResponse",
    "ResetPasswordResponse",
    # DTOs - Nested Models
    "UserInfo",
]
