"""
Session Gate Domain Entities

Each persisted entity lives in its own module.
"""

from .user import User
from .password_reset_token import PasswordResetToken

__all__ = [
    "User",
    "PasswordResetToken",
]
