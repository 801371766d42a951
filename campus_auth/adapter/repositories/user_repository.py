from typing import Optional

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from campus_auth.app.repositories.user_repository import IUserRepository
from campus_auth.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def set_reset_token(self, user_id: int, token: str) -> None:
        """Overwrite any previous reset token and mark the new one unused"""
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(reset_token=token, reset_token_used=False)
        )
        await self.session.execute(stmt)

    async def consume_reset_token(
        self, user_id: int, token: str, password_hash: str
    ) -> bool:
        """Single conditional UPDATE; only one concurrent caller can match the row"""
        stmt = (
            update(User)
            .where(
                User.id == user_id,
                User.reset_token == token,
                User.reset_token_used == False,  # noqa: E712
            )
            .values(
                password_hash=password_hash,
                reset_token_used=True,
                reset_token=None,
            )
        )
        # execute() rather than exec(): the UPDATE rowcount is read from its result
        result = await self.session.execute(stmt)
        return result.rowcount == 1
