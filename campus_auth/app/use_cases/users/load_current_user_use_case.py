"""
Load Current User Use Case

Resolves verified session claims to the account behind them.
"""

from pydantic import BaseModel

from campus_auth.app.services.unit_of_work import UnitOfWork
from campus_auth.domain.entities import UserRole
from campus_auth.shared.result import Error, Result, Return


class CurrentUser(BaseModel):
    """Account details exposed to the dashboards"""

    id: int
    email: str
    role: UserRole


class LoadCurrentUserUseCase:
    """
    Use case for loading the signed-in user.

    Business Rules:
    - Session claims provide user_id only; role is read from the store
    - A token for a user that no longer exists yields NOT_FOUND
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: int) -> Result[CurrentUser]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("NOT_FOUND", "User not found"))

            return Return.ok(
                CurrentUser(id=user.id, email=user.email, role=UserRole(user.role))
            )
