import logging
from typing import Optional

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.session_manager import SessionIdentity
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import ValidateSessionUseCase
from src.libs.result import Error

logger = logging.getLogger(__name__)

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# auto_error=False: a missing header must surface as UNAUTHENTICATED, not 403
security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


async def _authenticate(token: str, uow: UnitOfWork) -> SessionIdentity:
    result = await ValidateSessionUseCase(uow).execute(token)
    if result.is_err():
        # Cause is logged, never returned to the client
        logger.info(f"Rejected credential: {result.error.code}")
        raise ClientError(
            Error("UNAUTHORIZED", "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return result.value


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> SessionIdentity:
    """
    Request authenticator: resolve the bearer credential to a session identity.

    Routes that do not depend on this are public.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        SessionIdentity with user_id, email, role, tenant_id, session_id

    Raises:
        ClientError: 401 UNAUTHENTICATED if no bearer token was sent,
            401 UNAUTHORIZED if the token or its session is not valid
    """
    if credentials is None:
        raise ClientError(
            Error("UNAUTHENTICATED", "No valid authorization token provided"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return await _authenticate(credentials.credentials, uow)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> Optional[SessionIdentity]:
    """Like get_current_user, but anonymous requests resolve to None"""
    if credentials is None:
        return None
    return await _authenticate(credentials.credentials, uow)
