"""
Login Use Case

Authenticates credentials and issues a session token.
"""

import logging
from typing import Dict

from sqlalchemy.exc import SQLAlchemyError

from campus_auth.app.services.password_hasher import (
    burn_verification_time,
    verify_password,
)
from campus_auth.app.services.token_codec import SessionTokenCodec
from campus_auth.app.services.unit_of_work import UnitOfWork
from campus_auth.domain.entities import UserRole
from campus_auth.shared.result import Error, Result, Return
from . import messages
from .dtos import LoginResponse

logger = logging.getLogger(__name__)

ROLE_DESTINATIONS: Dict[UserRole, str] = {
    UserRole.ADMIN: "/admin",
    UserRole.TEACHER: "/teacher",
    UserRole.USER: "/user",
}


def destination_for(role: UserRole) -> str:
    """Landing area for a role after login"""
    return ROLE_DESTINATIONS[role]


class LoginUseCase:
    """
    Use case for login and session token issuance.

    Business Rules:
    - Unknown email and wrong password return the same INVALID_CREDENTIALS error
    - A bcrypt check runs even for unknown emails to keep timing uniform
    - Session token carries only the user id and lives for 7 days
    - Destination is chosen from the user's role
    """

    def __init__(self, uow: UnitOfWork, session_codec: SessionTokenCodec):
        self.uow = uow
        self.session_codec = session_codec

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with LoginResponse, or Error(INVALID_CREDENTIALS | INTERNAL_ERROR)
        """
        try:
            async with self.uow:
                user = await self.uow.users.get_by_email(email)

                if user is None:
                    burn_verification_time()
                    return Return.err(
                        Error("INVALID_CREDENTIALS", messages.INVALID_CREDENTIALS)
                    )

                if not verify_password(password, user.password_hash):
                    return Return.err(
                        Error("INVALID_CREDENTIALS", messages.INVALID_CREDENTIALS)
                    )

                session_token = self.session_codec.issue(user.id)
                role = UserRole(user.role)
        except SQLAlchemyError:
            logger.exception("Login lookup failed")
            return Return.err(Error("INTERNAL_ERROR", "Login failed"))

        return Return.ok(
            LoginResponse(
                session_token=session_token,
                role=role,
                redirect_to=destination_for(role),
            )
        )
