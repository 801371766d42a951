"""
Session Gate

One place that turns the session cookie into an allow/deny decision.
Protected page paths are redirected to the login page when the cookie is
missing or fails verification.
"""

import logging
from typing import Iterable, List

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from campus_auth.app.services.token_codec import SessionTokenCodec, TokenClaims
from campus_auth.domain.errors import InvalidSession

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"


def is_protected_path(path: str, protected_paths: Iterable[str]) -> bool:
    """True when path is one of the protected prefixes or below one"""
    for prefix in protected_paths:
        prefix = prefix.rstrip("/")
        if path == prefix or path.startswith(prefix + "/"):
            return True
    return False


def verify_session_cookie(
    request: Request, codec: SessionTokenCodec, cookie_name: str
) -> TokenClaims:
    """
    Verify the session cookie on a request.

    Raises:
        InvalidSession: cookie missing, tampered with, or expired
    """
    token = request.cookies.get(cookie_name)
    if not token:
        raise InvalidSession("Session cookie missing")
    return codec.verify(token)


class SessionGateMiddleware(BaseHTTPMiddleware):
    """Redirects unauthenticated requests for protected paths to /login"""

    def __init__(
        self,
        app,
        codec: SessionTokenCodec,
        protected_paths: List[str],
        cookie_name: str = "token",
    ):
        super().__init__(app)
        self.codec = codec
        self.protected_paths = list(protected_paths)
        self.cookie_name = cookie_name

    async def dispatch(self, request: Request, call_next):
        if is_protected_path(request.url.path, self.protected_paths):
            try:
                request.state.session = verify_session_cookie(
                    request, self.codec, self.cookie_name
                )
            except InvalidSession as exc:
                logger.info(f"Session gate denied {request.url.path}: {exc}")
                return RedirectResponse(LOGIN_PATH)

        return await call_next(request)
