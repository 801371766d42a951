"""
Reset Password Use Case

Consumes a reset token and replaces the account password.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from campus_auth.app.services.password_hasher import (
    MAX_PASSWORD_BYTES,
    exceeds_bcrypt_limit,
    hash_password,
)
from campus_auth.app.services.token_codec import ResetTokenCodec
from campus_auth.app.services.unit_of_work import UnitOfWork
from campus_auth.shared.result import Error, Result, Return
from . import messages
from .dtos import MessageResponse
from .register_use_case import MIN_PASSWORD_LENGTH
from .validate_reset_token_use_case import find_reset_token_owner

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Use case for completing a password reset.

    Business Rules:
    - Token must be present, correctly signed, unexpired, equal to the stored
      token and unused; every rejection shares one generic message
    - New password must be at least 6 characters and at most 72 bytes; it is
      only checked once the token has been accepted
    - Password hash, reset_token_used=True and reset_token=None are written in
      one conditional update, so a token can be consumed only once
    - Existing sessions stay valid until they expire
    """

    def __init__(
        self,
        uow: UnitOfWork,
        reset_codec: ResetTokenCodec,
        min_password_length: int = MIN_PASSWORD_LENGTH,
    ):
        self.uow = uow
        self.reset_codec = reset_codec
        self.min_password_length = min_password_length

    def _check_length(self, new_password: str) -> Optional[Error]:
        if len(new_password) < self.min_password_length:
            return Error(
                "PASSWORD_TOO_SHORT",
                messages.PASSWORD_TOO_SHORT.format(min_length=self.min_password_length),
            )
        if exceeds_bcrypt_limit(new_password):
            return Error(
                "PASSWORD_TOO_LONG",
                messages.PASSWORD_TOO_LONG.format(max_bytes=MAX_PASSWORD_BYTES),
            )
        return None

    async def execute(
        self, token: Optional[str], new_password: str
    ) -> Result[MessageResponse]:
        """
        Execute reset password use case.

        The token is checked before the new password, so a rejected token
        always gets the generic message.

        Args:
            token: Reset token from the emailed link
            new_password: Replacement password

        Returns:
            Result with success MessageResponse, or
            Error(INVALID_RESET_TOKEN | PASSWORD_TOO_SHORT | PASSWORD_TOO_LONG)
        """
        invalid = Return.err(
            Error("INVALID_RESET_TOKEN", messages.INVALID_RESET_TOKEN)
        )
        if not token:
            return invalid

        try:
            async with self.uow:
                user = await find_reset_token_owner(
                    self.uow.users, self.reset_codec, token
                )
                if user is None:
                    return invalid

                length_error = self._check_length(new_password or "")
                if length_error is not None:
                    return Return.err(length_error)

                user_id = user.id
                consumed = await self.uow.users.consume_reset_token(
                    user_id, token, hash_password(new_password)
                )
                if not consumed:
                    return invalid

                await self.uow.commit()
        except (SQLAlchemyError, ValueError):
            logger.exception("Password reset failed")
            return invalid

        logger.info(f"Password reset completed for user {user_id}")
        return Return.ok(MessageResponse(message=messages.RESET_SUCCESSFUL))
