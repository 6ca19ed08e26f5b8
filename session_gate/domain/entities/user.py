"""
User Entity

An account that can log in with email and password.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from session_gate.domain.base import utc_now


class User(SQLModel, table=True):
    """
    User entity - an account identified by its email address.

    Business Rules:
    - Email must be unique across all users (lower-cased before storage)
    - Password stored as bcrypt hash, never returned to clients
    - Only the password hash is ever updated after creation
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars
    name: Optional[str] = Field(default=None, max_length=100)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
