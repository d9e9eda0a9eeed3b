"""
Force Logout Use Case

Lets a user end every session of another user of the same tenant.
"""

from typing import Optional
from uuid import UUID

from src.app.services.session_manager import SessionManager, tenant_lock
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import ForceLogoutResponse


class ForceLogoutUseCase:
    """
    Use case for administrative forced logout.

    Business Rules:
    - Acting user and target must belong to the same tenant (else FORBIDDEN)
    - All active sessions of the target are deactivated
    - Forcing out a user with no session succeeds with count 0
    """

    def __init__(self, uow: UnitOfWork, session_manager: Optional[SessionManager] = None):
        self.uow = uow
        self.session_manager = session_manager or SessionManager(uow)

    async def execute(
        self, acting_user_id: UUID, target_user_id: UUID
    ) -> Result[ForceLogoutResponse]:
        """
        Execute force logout use case.

        Args:
            acting_user_id: Authenticated user requesting the logout
            target_user_id: User whose sessions are ended

        Returns:
            Result with ForceLogoutResponse, or Error USER_NOT_FOUND / FORBIDDEN
        """
        async with self.uow:
            target = await self.uow.users.get_by_id(target_user_id)
            if target is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            actor = await self.uow.users.get_by_id(acting_user_id)
            if (
                actor is None
                or actor.tenant_id is None
                or actor.tenant_id != target.tenant_id
            ):
                return Return.err(
                    Error("FORBIDDEN", "Cannot force logout users of another tenant")
                )

            async with tenant_lock(target.tenant_id):
                count = await self.session_manager.deactivate_all_for_user(target.id)
                await self.uow.commit()

            return Return.ok(
                ForceLogoutResponse(
                    message="User logged out successfully",
                    user_id=str(target_user_id),
                    sessions_deactivated=count,
                )
            )
