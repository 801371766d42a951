"""
Validate Reset Token Use Case

Checks a reset token against its signature, expiry and the stored copy.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from campus_auth.app.repositories.user_repository import IUserRepository
from campus_auth.app.services.token_codec import ResetTokenCodec
from campus_auth.app.services.unit_of_work import UnitOfWork
from campus_auth.domain.entities import User
from campus_auth.domain.errors import InvalidResetToken
from campus_auth.shared.result import Result, Return
from . import messages
from .dtos import ValidateResetTokenResponse

logger = logging.getLogger(__name__)


async def find_reset_token_owner(
    users: IUserRepository, reset_codec: ResetTokenCodec, token: str
) -> Optional[User]:
    """
    Return the user a reset token belongs to, or None if it must be rejected.

    A valid signature is not enough: the token must also be the one stored
    on the user and must not have been used.
    """
    try:
        claims = reset_codec.verify(token)
    except InvalidResetToken as exc:
        logger.info(f"Reset token rejected: {exc}")
        return None

    user = await users.get_by_id(claims.user_id)
    if user is None or user.reset_token != token or user.reset_token_used:
        return None

    return user


class ValidateResetTokenUseCase:
    """
    Use case for checking a reset token before showing the reset form.

    Fails closed with one generic message for every rejection reason.
    """

    def __init__(self, uow: UnitOfWork, reset_codec: ResetTokenCodec):
        self.uow = uow
        self.reset_codec = reset_codec

    async def execute(self, token: str) -> Result[ValidateResetTokenResponse]:
        invalid = Return.ok(
            ValidateResetTokenResponse(valid=False, message=messages.INVALID_RESET_TOKEN)
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

                return Return.ok(
                    ValidateResetTokenResponse(valid=True, user_id=user.id)
                )
        except SQLAlchemyError:
            logger.exception("Reset token validation failed")
            return invalid
