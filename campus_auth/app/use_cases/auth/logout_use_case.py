"""
Logout Use Case

Sessions are stateless, so logout only tells the caller to drop the cookie.
"""

from campus_auth.shared.result import Result, Return
from . import messages
from .dtos import LogoutResponse


class LogoutUseCase:
    """Use case for logout. Always succeeds; no server-side state changes."""

    async def execute(self) -> Result[LogoutResponse]:
        return Return.ok(LogoutResponse(redirect_to=messages.LOGIN_PATH))
