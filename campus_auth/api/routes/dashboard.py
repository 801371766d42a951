"""
Role dashboards.

Pages are rendered elsewhere; these endpoints hand the signed-in user's
context to them. The session gate has already redirected anonymous
requests. On a role page a role mismatch or a vanished account is sent to
the shared dashboard; on the shared dashboard a vanished account is sent to
the login page.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from campus_auth.api.error import ServerError
from campus_auth.api.utils.session_gate import LOGIN_PATH
from campus_auth.app.services.unit_of_work import UnitOfWork
from campus_auth.app.use_cases.users import CurrentUser, LoadCurrentUserUseCase
from campus_auth.depends import get_current_user_id, get_unit_of_work
from campus_auth.domain.entities import UserRole

router = APIRouter(tags=["Dashboard"])

DASHBOARD_PATH = "/dashboard"


async def _load_page(
    user_id: int, uow: UnitOfWork, required_role: Optional[UserRole] = None
):
    result = await LoadCurrentUserUseCase(uow).execute(user_id)

    if result.is_err():
        if result.error.code == "NOT_FOUND":
            fallback = LOGIN_PATH if required_role is None else DASHBOARD_PATH
            return RedirectResponse(fallback)
        raise ServerError(result.error)

    current_user = result.value
    if required_role is not None and current_user.role != required_role:
        return RedirectResponse(DASHBOARD_PATH)

    return current_user


@router.get(DASHBOARD_PATH, status_code=status.HTTP_200_OK, response_model=CurrentUser)
async def dashboard(
    user_id: int = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Shared dashboard, open to every role"""
    return await _load_page(user_id, uow)


@router.get("/admin", status_code=status.HTTP_200_OK, response_model=CurrentUser)
async def admin_dashboard(
    user_id: int = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    return await _load_page(user_id, uow, UserRole.ADMIN)


@router.get("/teacher", status_code=status.HTTP_200_OK, response_model=CurrentUser)
async def teacher_dashboard(
    user_id: int = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    return await _load_page(user_id, uow, UserRole.TEACHER)


@router.get("/user", status_code=status.HTTP_200_OK, response_model=CurrentUser)
async def user_dashboard(
    user_id: int = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    return await _load_page(user_id, uow, UserRole.USER)
