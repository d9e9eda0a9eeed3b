from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import ClientError, ServerError
from src.app.services.session_manager import SessionIdentity
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    LoginResponse,
    LoginUseCase,
    LogoutResponse,
    LogoutUseCase,
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
)
from src.depends import get_current_user, get_optional_user, get_unit_of_work
from src.domain.entities import UserRole

router = APIRouter(prefix="/auth", tags=["Authentication"])


def client_info(request: Request):
    """Client IP and User-Agent, both informational only"""
    ip_address = request.client.host if request.client else None
    return ip_address, request.headers.get("user-agent")


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    name: str = Field(..., min_length=1, max_length=255, description="Full name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="User password (min 8 chars)")
    role: UserRole = Field(default=UserRole.viewer, description="Role inside the tenant")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    User Login

    Verifies credentials and opens the user's single active session.
    Consumes one license slot of the user's tenant.

    Raises:
        - 401 Unauthorized: INVALID_CREDENTIALS
        - 403 Forbidden: ACCOUNT_DEACTIVATED, LICENSE_LIMIT_REACHED
        - 404 Not Found: TENANT_NOT_FOUND (user belongs to no tenant)
        - 409 Conflict: ACTIVE_SESSION_EXISTS
        - 500 Internal Server Error: Server error
    """
    ip_address, user_agent = client_info(request)

    use_case = LoginUseCase(uow)
    result = await use_case.execute(
        payload.email, payload.password, ip_address=ip_address, user_agent=user_agent
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code in ("ACCOUNT_DEACTIVATED", "LICENSE_LIMIT_REACHED"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "ACTIVE_SESSION_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "TENANT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    current_user: SessionIdentity = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Logout

    Deactivates the session named by the bearer credential and frees its
    license slot. Repeating the call with the same credential returns 401.
    """
    use_case = LogoutUseCase(uow)
    result = await use_case.execute(current_user.session_id)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse
)
async def register(
    payload: RegisterRequest,
    request: Request,
    current_user: Optional[SessionIdentity] = Depends(get_optional_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Register User

    Creates a user in the caller's tenant and logs the new user in.
    The tenant comes from the authenticated caller only.

    Raises:
        - 400 Bad Request: TENANT_REQUIRED
        - 401 Unauthorized: Bearer token present but invalid
        - 403 Forbidden: LICENSE_LIMIT_REACHED
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: EMAIL_ALREADY_EXISTS
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
    )
    tenant_id = current_user.tenant_id if current_user else None
    ip_address, user_agent = client_info(request)

    use_case = RegisterUseCase(uow)
    result = await use_case.execute(
        command, tenant_id, ip_address=ip_address, user_agent=user_agent
    )

    if result.is_err():
        error = result.error
        if error.code in ("EMAIL_ALREADY_EXISTS", "ACTIVE_SESSION_EXISTS"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "TENANT_REQUIRED":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "TENANT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "LICENSE_LIMIT_REACHED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


@router.get("/profile", response_model=SessionIdentity)
async def profile(current_user: SessionIdentity = Depends(get_current_user)):
    """Identity attached to the current credential"""
    return current_user
