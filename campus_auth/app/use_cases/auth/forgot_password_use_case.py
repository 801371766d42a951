"""
Forgot Password Use Case

Issues a single-use reset token and mails the reset link.
"""

import logging
from urllib.parse import urlencode

from sqlalchemy.exc import SQLAlchemyError

from campus_auth.app.services.notification import INotificationService
from campus_auth.app.services.token_codec import ResetTokenCodec
from campus_auth.app.services.unit_of_work import UnitOfWork
from campus_auth.domain.errors import EmailDeliveryFailed
from campus_auth.shared.result import Result, Return
from . import messages
from .dtos import MessageResponse

logger = logging.getLogger(__name__)


def build_reset_link(base_url: str, token: str) -> str:
    return f"{base_url.rstrip('/')}/reset-password?{urlencode({'token': token})}"


class ForgotPasswordUseCase:
    """
    Use case for requesting a password reset link.

    Business Rules:
    - Unknown emails get the same message as known ones, with no side effect
    - Reset token expires in 1 hour and is mirrored on the user row
    - Issuing a new token supersedes any previous unconsumed one
    - Delivery failure returns a distinct message (known enumeration leak)
    - Never raises to the caller
    """

    def __init__(
        self,
        uow: UnitOfWork,
        reset_codec: ResetTokenCodec,
        notifier: INotificationService,
        base_url: str,
    ):
        self.uow = uow
        self.reset_codec = reset_codec
        self.notifier = notifier
        self.base_url = base_url

    async def execute(self, email: str) -> Result[MessageResponse]:
        """
        Execute forgot password use case.

        Args:
            email: Address the reset link should go to

        Returns:
            Result with MessageResponse (always ok)
        """
        generic = Return.ok(MessageResponse(message=messages.RESET_LINK_SENT))

        try:
            async with self.uow:
                user = await self.uow.users.get_by_email(email)
                if user is None:
                    return generic

                user_id = user.id
                reset_token = self.reset_codec.issue(user_id)
                await self.uow.users.set_reset_token(user_id, reset_token)
                await self.uow.commit()
        except SQLAlchemyError:
            logger.exception("Could not store password reset token")
            return generic

        reset_link = build_reset_link(self.base_url, reset_token)

        try:
            await self.notifier.send(
                email,
                messages.RESET_EMAIL_SUBJECT,
                messages.RESET_EMAIL_BODY.format(link=reset_link),
            )
        except EmailDeliveryFailed:
            logger.exception(f"Failed to send reset email for user {user_id}")
            return Return.ok(MessageResponse(message=messages.RESET_EMAIL_FAILED))

        logger.info(f"Password reset requested for user {user_id}")
        return generic
