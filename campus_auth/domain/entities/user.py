"""
User Entity

Represents a portal account with a single role.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, SQLModel

from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - a registered portal account.

    Business Rules:
    - Email must be unique across all users (exact match, case-sensitive)
    - Password stored as bcrypt hash (cost factor 12)
    - Role is set at creation and never changed by the auth flows
    - reset_token mirrors the last issued reset token for single-use checks
    - reset_token_used is set once the mirrored token has been consumed
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    role: UserRole = Field(default=UserRole.USER)

    # Password reset (single-use enforcement)
    reset_token: Optional[str] = Field(default=None, max_length=512)
    reset_token_used: bool = Field(default=False)

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
