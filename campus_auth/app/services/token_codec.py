"""
Signed, time-limited tokens carrying a user identity claim.

Session and reset tokens share one HS256 JWT mechanism and differ in
lifetime, in a `typ` claim and in the exception raised on failure. A token
of one kind is never accepted where the other is expected. Single-use enforcement for
reset tokens lives in the use cases, not here.
"""

import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Optional, Type

from jose import JWTError, jwt
from pydantic import BaseModel

from config import INSECURE_JWT_SECRET
from campus_auth.domain.errors import (
    AuthError,
    InsecureConfiguration,
    InvalidResetToken,
    InvalidSession,
)

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class TokenClaims(BaseModel):
    """Verified claims extracted from a token"""

    user_id: int
    issued_at: datetime
    expires_at: datetime


class TokenCodec:
    """Issues and verifies HS256 JWTs with a fixed lifetime"""

    error_class: Type[AuthError] = AuthError
    token_type = "token"

    def __init__(self, secret: str, lifetime: timedelta):
        self.secret = secret
        self.lifetime = lifetime

    def issue(self, user_id: int, now: Optional[datetime] = None) -> str:
        """
        Issue a signed token for user_id.

        Args:
            user_id: Identity claim
            now: Issue time (defaults to current UTC time)

        Returns:
            JWT string expiring `lifetime` after issue time
        """
        now = now or datetime.now(UTC)
        payload = {
            "user_id": user_id,
            "iat": now,
            "exp": now + self.lifetime,
            # Two tokens issued in the same second must still differ
            "jti": secrets.token_urlsafe(8),
            "typ": self.token_type,
        }
        return jwt.encode(payload, self.secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify signature and expiry, then return the claims.

        Raises:
            error_class: signature invalid, wrong token type, payload malformed
                or token expired
        """
        if not token or not isinstance(token, str):
            raise self.error_class("Token missing")
        try:
            payload = jwt.decode(token, self.secret, algorithms=[ALGORITHM])
        except JWTError as exc:
            raise self.error_class(str(exc)) from exc

        if payload.get("typ") != self.token_type:
            raise self.error_class("Wrong token type")

        user_id = payload.get("user_id")
        issued_at = payload.get("iat")
        expires_at = payload.get("exp")
        if (
            not isinstance(user_id, int)
            or isinstance(user_id, bool)
            or not isinstance(issued_at, (int, float))
            or not isinstance(expires_at, (int, float))
        ):
            raise self.error_class("Malformed token payload")

        return TokenClaims(
            user_id=user_id,
            issued_at=datetime.fromtimestamp(issued_at, UTC),
            expires_at=datetime.fromtimestamp(expires_at, UTC),
        )


class SessionTokenCodec(TokenCodec):
    """Session tokens: 7-day lifetime, failures raise InvalidSession"""

    error_class = InvalidSession
    token_type = "session"

    def __init__(self, secret: str, lifetime: timedelta = timedelta(days=7)):
        super().__init__(secret, lifetime)


class ResetTokenCodec(TokenCodec):
    """Password reset tokens: 1-hour lifetime, failures raise InvalidResetToken"""

    error_class = InvalidResetToken
    token_type = "reset"

    def __init__(self, secret: str, lifetime: timedelta = timedelta(hours=1)):
        super().__init__(secret, lifetime)


def resolve_jwt_secret(config) -> str:
    """
    Return the configured signing secret.

    The built-in fallback is accepted outside production only; production
    deployments without JWT_SECRET refuse to start.
    """
    secret = getattr(config, "JWT_SECRET", None) or INSECURE_JWT_SECRET
    if secret == INSECURE_JWT_SECRET:
        if getattr(config, "ENVIRONMENT", "development") == "production":
            raise InsecureConfiguration("JWT_SECRET must be set in production")
        logger.warning("JWT_SECRET is not set; using the insecure development default")
    return secret


def session_token_codec(config) -> SessionTokenCodec:
    return SessionTokenCodec(
        resolve_jwt_secret(config), timedelta(days=config.SESSION_TTL_DAYS)
    )


def reset_token_codec(config) -> ResetTokenCodec:
    return ResetTokenCodec(
        resolve_jwt_secret(config), timedelta(minutes=config.RESET_TOKEN_TTL_MINUTES)
    )
