from fastapi import Depends, Request, status

from campus_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from campus_auth.api.error import ClientError
from campus_auth.api.utils.session_gate import verify_session_cookie
from campus_auth.app.services.notification import INotificationService
from campus_auth.app.services.token_codec import ResetTokenCodec, SessionTokenCodec
from campus_auth.domain.errors import InvalidSession
from campus_auth.shared.result import Error


def get_config(request: Request):
    return request.app.state.config


async def get_unit_of_work(request: Request):
    async with request.app.state.session_factory() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_session_codec(request: Request) -> SessionTokenCodec:
    return request.app.state.session_codec


def get_reset_codec(request: Request) -> ResetTokenCodec:
    return request.app.state.reset_codec


def get_notifier(request: Request) -> INotificationService:
    return request.app.state.notifier


async def get_current_user_id(
    request: Request,
    codec: SessionTokenCodec = Depends(get_session_codec),
    config=Depends(get_config),
) -> int:
    """
    Dependency to extract and verify the session token from the cookie.

    Returns:
        user_id claim of the session

    Raises:
        ClientError: 401 if the cookie is missing, invalid or expired
    """
    try:
        claims = verify_session_cookie(request, codec, config.SESSION_COOKIE_NAME)
    except InvalidSession:
        raise ClientError(
            Error("INVALID_SESSION", "Invalid or expired session"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return claims.user_id
