"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from session_gate.app.services.session_cookie import CookieInstruction
from session_gate.app.services.token_issuer import SessionClaims
from session_gate.domain.entities import User


# ============================================================================
# Commands
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    Contains only business-relevant data (no HTTP concerns).
    """

    email: str
    password: str
    name: Optional[str] = None


class ResetPasswordCommand(BaseModel):
    token: str
    email: str
    new_password: str


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """Public user fields, never includes the password hash"""

    id: str
    email: str
    name: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            email=user.email,
            name=user.name,
            created_at=user.created_at,
        )


class RegisterResponse(BaseModel):
    """Response for register use case"""

    user: UserInfo


class LoginResult(BaseModel):
    """
    Result of login use case

    The route sets `cookie` on the HTTP response and returns only
    `user` and `message` in the body.
    """

    user: UserInfo
    session_token: str
    cookie: CookieInstruction


class LoginResponse(BaseModel):
    """Response body for login"""

    user: UserInfo
    message: str


class LogoutResult(BaseModel):
    success: bool
    cookie: CookieInstruction


class VerifySessionResponse(BaseModel):
    """Response for verify session use case"""

    message: str
    user: SessionClaims


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    message: str
    # Development only, see EXPOSE_RESET_TOKEN
    token: Optional[str] = None


class ResetPasswordResponse(BaseModel):
    """Response for reset password use case"""

    message: str
