"""
Remove User Use Case

Account deletion: ends the user's sessions, then removes them with the user.
"""

from typing import Optional
from uuid import UUID
from pydantic import BaseModel

from src.app.services.session_manager import SessionManager, tenant_lock
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return


class RemoveUserResponse(BaseModel):
    """Response DTO for RemoveUserUseCase"""

    user_id: str
    sessions_removed: int


class RemoveUserUseCase:
    """
    Use case for removing a user.

    Business Rules:
    - Active sessions are deactivated first so the tenant is recounted
    - Session rows are physically deleted together with the user
    """

    def __init__(self, uow: UnitOfWork, session_manager: Optional[SessionManager] = None):
        self.uow = uow
        self.session_manager = session_manager or SessionManager(uow)

    async def execute(self, user_id: UUID) -> Result[RemoveUserResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            tenant_id = user.tenant_id
            async with tenant_lock(tenant_id):
                await self.session_manager.deactivate_all_for_user(user_id)
                removed = await self.uow.sessions.delete_by_user_id(user_id)
                await self.uow.users.delete(user)
                if tenant_id is not None:
                    await self.session_manager.license_counter.recount(tenant_id)
                await self.uow.commit()

            return Return.ok(
                RemoveUserResponse(user_id=str(user_id), sessions_removed=removed)
            )
