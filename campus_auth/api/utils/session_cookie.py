"""
Session cookie helpers.

The session token travels only in an HTTP-only, SameSite=strict cookie;
it is never returned in a response body.
"""

from fastapi import Response


def cookie_is_secure(config) -> bool:
    return getattr(config, "ENVIRONMENT", "development") == "production"


def set_session_cookie(response: Response, token: str, config) -> None:
    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=cookie_is_secure(config),
        samesite="strict",
        max_age=config.SESSION_TTL_DAYS * 24 * 60 * 60,
        path="/",
    )


def clear_session_cookie(response: Response, config) -> None:
    response.delete_cookie(
        key=config.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=cookie_is_secure(config),
        samesite="strict",
    )
