"""
Admin API Routes - System Administration Endpoints

These endpoints are for internal service integrations (billing, support
tooling, schedulers). Authentication is via Admin API Key, not user JWTs.
"""

from uuid import UUID
from fastapi import APIRouter, Depends, Header, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.session_manager import SweepReport
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.sessions import (
    LookupSessionUseCase,
    SessionLookupResponse,
    SweepExpiredSessionsUseCase,
)
from src.app.use_cases.tenants import (
    UpdateLicenseLimitResponse,
    UpdateLicenseLimitUseCase,
)
from src.app.use_cases.users import (
    DeactivateUserResponse,
    DeactivateUserUseCase,
    RemoveUserResponse,
    RemoveUserUseCase,
)
from src.depends import get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])

NOT_FOUND_CODES = ("TENANT_NOT_FOUND", "USER_NOT_FOUND", "SESSION_NOT_FOUND")


class UpdateLicenseLimitRequest(BaseModel):
    """Request to change a tenant's purchased license count"""

    license_limit: int = Field(..., ge=1, description="New license limit (min 1)")


@router.put(
    "/tenants/{tenant_id}/license",
    status_code=status.HTTP_200_OK,
    response_model=UpdateLicenseLimitResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def update_license_limit(
    tenant_id: UUID,
    request: UpdateLicenseLimitRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update License Limit

    Billing system endpoint applied after a plan change.

    Requires: X-Admin-API-Key header

    Raises:
        - 400 Bad Request: LICENSE_LIMIT_BELOW_USAGE, INVALID_LICENSE_LIMIT
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: TENANT_NOT_FOUND
        - 500 Internal Server Error: Server error
    """
    use_case = UpdateLicenseLimitUseCase(uow)
    result = await use_case.execute(tenant_id, request.license_limit)

    if result.is_err():
        error = result.error
        if error.code in NOT_FOUND_CODES:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("LICENSE_LIMIT_BELOW_USAGE", "INVALID_LICENSE_LIMIT"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


@router.post(
    "/sessions/sweep-expired",
    status_code=status.HTTP_200_OK,
    response_model=SweepReport,
    dependencies=[Depends(verify_admin_api_key)],
)
async def sweep_expired_sessions(uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Sweep Expired Sessions

    Scheduler hook deactivating every session past its expiry and
    recounting each affected tenant once. Safe to call repeatedly.

    Requires: X-Admin-API-Key header
    """
    use_case = SweepExpiredSessionsUseCase(uow)
    result = await use_case.execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get(
    "/sessions/lookup",
    status_code=status.HTTP_200_OK,
    response_model=SessionLookupResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def lookup_session(
    x_session_token: str = Header(..., description="Opaque session token"),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Lookup Session

    Resolves a raw session token to its owner for support tooling.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: SESSION_NOT_FOUND (unknown, inactive or expired)
    """
    use_case = LookupSessionUseCase(uow)
    result = await use_case.execute(x_session_token)

    if result.is_err():
        error = result.error
        if error.code in NOT_FOUND_CODES:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/users/{user_id}/deactivate",
    status_code=status.HTTP_200_OK,
    response_model=DeactivateUserResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def deactivate_user(
    user_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Deactivate User

    Blocks further logins and ends any session the user holds.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: USER_NOT_FOUND
    """
    use_case = DeactivateUserUseCase(uow)
    result = await use_case.execute(user_id)

    if result.is_err():
        error = result.error
        if error.code in NOT_FOUND_CODES:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.delete(
    "/users/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=RemoveUserResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def remove_user(
    user_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Remove User

    Deletes the user together with all of their sessions.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: USER_NOT_FOUND
    """
    use_case = RemoveUserUseCase(uow)
    result = await use_case.execute(user_id)

    if result.is_err():
        error = result.error
        if error.code in NOT_FOUND_CODES:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
