"""
Logout Use Case

Ends the caller's session and releases its license slot.
"""

from typing import Optional
from uuid import UUID

from src.app.services.session_manager import SessionManager, tenant_lock
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .dtos import LogoutResponse


class LogoutUseCase:
    """
    Use case for logout.

    Business Rules:
    - Succeeds even if the session is already inactive or unknown
    - License counter of the owner's tenant is recounted
    """

    def __init__(self, uow: UnitOfWork, session_manager: Optional[SessionManager] = None):
        self.uow = uow
        self.session_manager = session_manager or SessionManager(uow)

    async def execute(self, session_id: UUID) -> Result[LogoutResponse]:
        async with self.uow:
            tenant_id = None
            session = await self.uow.sessions.get_by_id(session_id)
            if session is not None:
                owner = await self.uow.users.get_by_id(session.user_id)
                tenant_id = owner.tenant_id if owner else None

            async with tenant_lock(tenant_id):
                deactivated = await self.session_manager.deactivate(session_id)
                await self.uow.commit()

            return Return.ok(
                LogoutResponse(message="Logged out successfully", deactivated=deactivated)
            )
