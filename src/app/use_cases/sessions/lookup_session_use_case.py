"""
Lookup Session Use Case

Out-of-band resolution of a raw session token (support tooling).
"""

from typing import Optional

from src.app.services.session_manager import SessionManager
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import build_user_profile
from src.libs.result import Error, Result, Return
from .dtos import SessionLookupResponse, TenantSummary


class LookupSessionUseCase:
    """
    Use case resolving an opaque session token to its owner.

    Business Rules:
    - Unknown, inactive and expired tokens all return SESSION_NOT_FOUND
    - An expired session found here is deactivated
    - A successful lookup counts as activity
    """

    def __init__(self, uow: UnitOfWork, session_manager: Optional[SessionManager] = None):
        self.uow = uow
        self.session_manager = session_manager or SessionManager(uow)

    async def execute(self, session_token: str) -> Result[SessionLookupResponse]:
        async with self.uow:
            user = await self.session_manager.validate_by_token(session_token)
            await self.uow.commit()

            if user is None:
                return Return.err(
                    Error("SESSION_NOT_FOUND", "No active session for this token")
                )

            tenant = None
            if user.tenant_id is not None:
                tenant = await self.uow.tenants.get_by_id(user.tenant_id)

            return Return.ok(
                SessionLookupResponse(
                    user=build_user_profile(user),
                    tenant=TenantSummary(id=str(tenant.id), name=tenant.name)
                    if tenant
                    else None,
                )
            )
