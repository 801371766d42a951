from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, EmailStr, Field

from campus_auth.api.error import ClientError, ServerError
from campus_auth.api.utils.session_cookie import clear_session_cookie, set_session_cookie
from campus_auth.app.services.notification import INotificationService
from campus_auth.app.services.token_codec import ResetTokenCodec, SessionTokenCodec
from campus_auth.app.services.unit_of_work import UnitOfWork
from campus_auth.app.use_cases.auth import (
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    LoginUseCase,
    LogoutUseCase,
    LogoutResponse,
    ForgotPasswordUseCase,
    MessageResponse,
)
from campus_auth.depends import (
    get_config,
    get_notifier,
    get_reset_codec,
    get_session_codec,
    get_unit_of_work,
)
from campus_auth.domain.entities import UserRole

router = APIRouter(prefix="/auth", tags=["Authentication"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Password rules are enforced by the use case so that mismatch and
    length errors keep their own codes.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password (min 6 chars)")
    confirm_password: str = Field(..., description="Must equal password")


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse
)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    config=Depends(get_config),
):
    """
    User Registration

    Creates a USER-role account. Does not log the user in; the response
    points the client at the login page.

    Raises:
        - 400 Bad Request: Passwords do not match, password too short or too long
        - 409 Conflict: Email already registered
        - 422 Unprocessable Entity: Malformed payload (handled by FastAPI)
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        email=request.email,
        password=request.password,
        confirm_password=request.confirm_password,
    )

    use_case = RegisterUseCase(uow, min_password_length=config.MIN_PASSWORD_LENGTH)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code in (
            "PASSWORD_MISMATCH",
            "PASSWORD_TOO_SHORT",
            "PASSWORD_TOO_LONG",
        ):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "EMAIL_TAKEN":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


class LoginResult(BaseModel):
    """Login HTTP response; the session token itself is only in the cookie"""

    role: UserRole
    redirect_to: str


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResult)
async def login(
    request: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_codec: SessionTokenCodec = Depends(get_session_codec),
    config=Depends(get_config),
):
    """
    User Login

    Verifies credentials, sets the session cookie and returns the
    role-specific landing area.

    Raises:
        - 401 Unauthorized: Invalid credentials (same for unknown email and wrong password)
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, session_codec)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    login_response = result.value
    set_session_cookie(response, login_response.session_token, config)

    return LoginResult(role=login_response.role, redirect_to=login_response.redirect_to)


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(response: Response, config=Depends(get_config)):
    """
    User Logout

    Clears the session cookie. Sessions are stateless, so nothing changes
    server-side and the call always succeeds.
    """
    result = await LogoutUseCase().execute()
    clear_session_cookie(response, config)
    return result.value


class ForgotPasswordRequest(BaseModel):
    """Forgot password HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/forgot-password", status_code=status.HTTP_200_OK, response_model=MessageResponse
)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    reset_codec: ResetTokenCodec = Depends(get_reset_codec),
    notifier: INotificationService = Depends(get_notifier),
    config=Depends(get_config),
):
    """
    Forgot Password

    Emails a one-hour, single-use reset link when the email is registered.

    Security:
        - Same message for registered and unregistered emails
        - Delivery failures return a distinct message

    Returns:
        - 200 OK: Always
    """
    use_case = ForgotPasswordUseCase(uow, reset_codec, notifier, config.BASE_URL)
    result = await use_case.execute(request.email)

    return result.value
