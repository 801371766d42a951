"""
Password reset endpoint consumed by the reset-password page.

One POST endpoint dispatches on `type`:
- {"type": "validate", "token"} -> {"valid", "user_id"?, "message"?}
- {"type": "reset", "token", "password"} -> {"message"}
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from campus_auth.api.error import ServerError
from campus_auth.app.services.token_codec import ResetTokenCodec
from campus_auth.app.services.unit_of_work import UnitOfWork
from campus_auth.app.use_cases.auth import (
    ResetPasswordUseCase,
    ValidateResetTokenUseCase,
)
from campus_auth.depends import get_config, get_reset_codec, get_unit_of_work

router = APIRouter(prefix="/api/auth", tags=["Password Reset"])


class ResetRequest(BaseModel):
    """Reset endpoint payload; unknown types are answered with 400"""

    type: str = Field(..., description="validate or reset")
    token: Optional[str] = Field(None, description="Reset token from the emailed link")
    password: Optional[str] = Field(None, description="New password (reset only)")


@router.post("/reset", status_code=status.HTTP_200_OK)
async def reset(
    request: ResetRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    reset_codec: ResetTokenCodec = Depends(get_reset_codec),
    config=Depends(get_config),
):
    """
    Validate a reset token or complete a password reset.

    Every token rejection reason shares the same message, and the response
    is 200 either way so the page can show the message as-is.
    """
    if request.type == "validate":
        use_case = ValidateResetTokenUseCase(uow, reset_codec)
        result = await use_case.execute(request.token)
        return result.value.model_dump(exclude_none=True)

    if request.type == "reset":
        use_case = ResetPasswordUseCase(
            uow, reset_codec, min_password_length=config.MIN_PASSWORD_LENGTH
        )
        result = await use_case.execute(request.token, request.password or "")
        if result.is_err():
            error = result.error
            if error.code in (
                "INVALID_RESET_TOKEN",
                "PASSWORD_TOO_SHORT",
                "PASSWORD_TOO_LONG",
            ):
                return {"message": error.message}
            raise ServerError(error)
        return result.value.model_dump()

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"message": "Invalid request"}
    )
