"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase, ROLE_DESTINATIONS, destination_for
from .logout_use_case import LogoutUseCase
from .forgot_password_use_case import ForgotPasswordUseCase, build_reset_link
from .validate_reset_token_use_case import (
    ValidateResetTokenUseCase,
    find_reset_token_owner,
)
from .reset_password_use_case import ResetPasswordUseCase
from .dtos import (
    RegisterCommand,
    RegisterResponse,
    LoginResponse,
    LogoutResponse,
    MessageResponse,
    ValidateResetTokenResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "ForgotPasswordUseCase",
    "ValidateResetTokenUseCase",
    "ResetPasswordUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "RegisterResponse",
    "LoginResponse",
    "LogoutResponse",
    "MessageResponse",
    "ValidateResetTokenResponse",
    # Helpers
    "ROLE_DESTINATIONS",
    "destination_for",
    "build_reset_link",
    "find_reset_token_owner",
]
