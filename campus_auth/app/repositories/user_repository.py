from abc import ABC, abstractmethod
from typing import Optional

from campus_auth.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address (exact match)"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def set_reset_token(self, user_id: int, token: str) -> None:
        """Store a freshly issued reset token and mark it unused"""
        pass

    @abstractmethod
    async def consume_reset_token(
        self, user_id: int, token: str, password_hash: str
    ) -> bool:
        """
        Atomically replace the password if token is the stored, unused one.

        Returns False when no row matched (token superseded, already used,
        or user gone).
        """
        pass
