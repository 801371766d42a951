"""
Use Cases

- auth/: Registration, login, logout and password reset flows
- users/: Current-user lookup for the role dashboards
"""

from .auth import (
    RegisterUseCase,
    LoginUseCase,
    LogoutUseCase,
    ForgotPasswordUseCase,
    ValidateResetTokenUseCase,
    ResetPasswordUseCase,
)
from .users import LoadCurrentUserUseCase

__all__ = [
    # Auth
    "RegisterUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "ForgotPasswordUseCase",
    "ValidateResetTokenUseCase",
    "ResetPasswordUseCase",
    # Users
    "LoadCurrentUserUseCase",
]
