"""
Register Use Case

Creates a USER-role account from an email and a confirmed password.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from campus_auth.app.services.password_hasher import (
    MAX_PASSWORD_BYTES,
    exceeds_bcrypt_limit,
    hash_password,
)
from campus_auth.app.services.unit_of_work import UnitOfWork
from campus_auth.domain.entities import User, UserRole
from campus_auth.shared.result import Error, Result, Return
from . import messages
from .dtos import RegisterCommand, RegisterResponse

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class RegisterUseCase:
    """
    Use case for account registration.

    Business Rules:
    - password and confirm_password must match
    - Password must be at least 6 characters and at most 72 bytes
    - Email must not already be registered (exact match)
    - Password hashed with bcrypt cost factor 12
    - New accounts get role USER and no reset token
    - No auto-login: the caller is sent to the login page
    """

    def __init__(self, uow: UnitOfWork, min_password_length: int = MIN_PASSWORD_LENGTH):
        self.uow = uow
        self.min_password_length = min_password_length

    def _validate(self, command: RegisterCommand) -> Result[None]:
        if command.password != command.confirm_password:
            return Return.err(
                Error("PASSWORD_MISMATCH", messages.PASSWORDS_DO_NOT_MATCH)
            )

        if len(command.password) < self.min_password_length:
            return Return.err(
                Error(
                    "PASSWORD_TOO_SHORT",
                    messages.PASSWORD_TOO_SHORT.format(
                        min_length=self.min_password_length
                    ),
                )
            )

        if exceeds_bcrypt_limit(command.password):
            return Return.err(
                Error(
                    "PASSWORD_TOO_LONG",
                    messages.PASSWORD_TOO_LONG.format(max_bytes=MAX_PASSWORD_BYTES),
                )
            )

        return Return.ok(None)

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        """
        Execute register use case.

        Args:
            command: RegisterCommand with email, password, confirm_password

        Returns:
            Result[RegisterResponse] pointing at the login page, or
            Error(PASSWORD_MISMATCH | PASSWORD_TOO_SHORT | PASSWORD_TOO_LONG |
                  EMAIL_TAKEN | INTERNAL_ERROR)
        """
        validation = self._validate(command)
        if validation.is_err():
            return Return.err(validation.error)

        try:
            async with self.uow:
                existing_user = await self.uow.users.get_by_email(command.email)
                if existing_user:
                    return Return.err(Error("EMAIL_TAKEN", messages.EMAIL_TAKEN))

                user = User(
                    email=command.email,
                    password_hash=hash_password(command.password),
                    role=UserRole.USER,
                    reset_token=None,
                    reset_token_used=False,
                )
                user = await self.uow.users.create(user)
                user_id = user.id
                await self.uow.commit()
        except IntegrityError:
            # Concurrent registration won the unique email constraint
            return Return.err(Error("EMAIL_TAKEN", messages.EMAIL_TAKEN))
        except (SQLAlchemyError, ValueError):
            logger.exception("Registration failed")
            return Return.err(Error("INTERNAL_ERROR", "Registration failed"))

        logger.info(f"Registered user {user_id}")
        return Return.ok(
            RegisterResponse(user_id=user_id, redirect_to=messages.LOGIN_PATH)
        )
