"""
Deactivate User Use Case

Account deactivation: the user can no longer log in and loses any session.
"""

from typing import Optional
from uuid import UUID
from pydantic import BaseModel

from src.app.services.session_manager import SessionManager, tenant_lock
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return


class DeactivateUserResponse(BaseModel):
    """Response DTO for DeactivateUserUseCase"""

    user_id: str
    is_active: bool
    sessions_deactivated: int


class DeactivateUserUseCase:
    """
    Use case for deactivating a user account.

    Idempotent: deactivating an inactive user succeeds with 0 sessions.
    """

    def __init__(self, uow: UnitOfWork, session_manager: Optional[SessionManager] = None):
        self.uow = uow
        self.session_manager = session_manager or SessionManager(uow)

    async def execute(self, user_id: UUID) -> Result[DeactivateUserResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            async with tenant_lock(user.tenant_id):
                user.is_active = False
                await self.uow.users.update(user)
                count = await self.session_manager.deactivate_all_for_user(user_id)
                await self.uow.commit()

            return Return.ok(
                DeactivateUserResponse(
                    user_id=str(user_id), is_active=False, sessions_deactivated=count
                )
            )
