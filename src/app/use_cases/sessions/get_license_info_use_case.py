"""
Get License Info Use Case

Reports a tenant's license pool and who currently holds its slots.
"""

from typing import Optional
from uuid import UUID

from src.app.services.license_counter import LicenseCounter
from src.app.services.session_manager import SessionManager
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import ActiveSessionInfo, LicenseInfoResponse, SessionUserSummary


class GetLicenseInfoUseCase:
    """Read-only view of license_limit, license_used and active sessions"""

    def __init__(self, uow: UnitOfWork, session_manager: Optional[SessionManager] = None):
        self.uow = uow
        self.session_manager = session_manager or SessionManager(uow)

    async def execute(self, tenant_id: Optional[UUID]) -> Result[LicenseInfoResponse]:
        async with self.uow:
            tenant = None
            if tenant_id is not None:
                tenant = await self.uow.tenants.get_by_id(tenant_id)
            if tenant is None:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            rows = await self.session_manager.get_active_sessions(tenant.id)

            return Return.ok(
                LicenseInfoResponse(
                    license_limit=tenant.license_limit,
                    license_used=tenant.license_used,
                    available=LicenseCounter.available_slots(tenant),
                    active_sessions=[
                        ActiveSessionInfo(
                            session_id=str(session.id),
                            user=SessionUserSummary(
                                id=str(user.id), name=user.name, email=user.email
                            ),
                            last_activity=session.last_activity,
                            ip_address=session.ip_address,
                        )
                        for session, user in rows
                    ],
                )
            )
