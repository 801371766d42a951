"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the auth domain.
"""

from typing import Optional
from pydantic import BaseModel

from campus_auth.domain.entities import UserRole


# ============================================================================
# Commands
# ============================================================================


class RegisterCommand(BaseModel):
    """Registration intent as submitted by the client"""

    email: str
    password: str
    confirm_password: str


# ============================================================================
# Response DTOs
# ============================================================================


class RegisterResponse(BaseModel):
    """Response for registration; the client continues at the login page"""

    user_id: int
    redirect_to: str


class LoginResponse(BaseModel):
    """Response for login; session_token is set as a cookie by the caller"""

    session_token: str
    role: UserRole
    redirect_to: str


class LogoutResponse(BaseModel):
    """Response for logout"""

    redirect_to: str


class MessageResponse(BaseModel):
    """Plain message response used by the password reset flow"""

    message: str


class ValidateResetTokenResponse(BaseModel):
    """Response for reset token validation"""

    valid: bool
    user_id: Optional[int] = None
    message: Optional[str] = None
