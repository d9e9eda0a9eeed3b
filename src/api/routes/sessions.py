from uuid import UUID
from fastapi import APIRouter, Depends, status

from src.api.error import ClientError, ServerError
from src.app.services.session_manager import SessionIdentity
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.sessions import (
    ForceLogoutResponse,
    ForceLogoutUseCase,
    GetLicenseInfoUseCase,
    LicenseInfoResponse,
)
from src.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/auth", tags=["Sessions"])


@router.get(
    "/license-info",
    status_code=status.HTTP_200_OK,
    response_model=LicenseInfoResponse,
)
async def license_info(
    current_user: SessionIdentity = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    License Info

    Returns the caller's tenant license pool and every active session
    currently holding a slot, most recently active first.

    Raises:
        - 401 Unauthorized: Missing or invalid token
        - 404 Not Found: TENANT_NOT_FOUND
    """
    use_case = GetLicenseInfoUseCase(uow)
    result = await use_case.execute(current_user.tenant_id)

    if result.is_err():
        error = result.error
        if error.code == "TENANT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.delete(
    "/force-logout/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=ForceLogoutResponse,
)
async def force_logout(
    user_id: UUID,
    current_user: SessionIdentity = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Force Logout

    Ends every active session of another user of the caller's tenant,
    freeing their license slot. Useful when a colleague left a browser
    logged in and the tenant is at its limit.

    Raises:
        - 401 Unauthorized: Missing or invalid token
        - 403 Forbidden: Target belongs to another tenant
        - 404 Not Found: USER_NOT_FOUND
        - 500 Internal Server Error: Server error
    """
    use_case = ForceLogoutUseCase(uow)
    result = await use_case.execute(current_user.user_id, user_id)

    if result.is_err():
        error = result.error
        if error.code == "FORBIDDEN":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
