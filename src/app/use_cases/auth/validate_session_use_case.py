"""
Validate Session Use Case

Request-path check behind the bearer authenticator.
"""

from typing import Optional

from src.app.services.session_manager import SessionIdentity, SessionManager
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result


class ValidateSessionUseCase:
    """
    Use case resolving a bearer credential to a SessionIdentity.

    Commits in every outcome: a successful check persists last_activity and
    an expired session stays deactivated after the request is rejected.
    """

    def __init__(self, uow: UnitOfWork, session_manager: Optional[SessionManager] = None):
        self.uow = uow
        self.session_manager = session_manager or SessionManager(uow)

    async def execute(self, token: str) -> Result[SessionIdentity]:
        async with self.uow:
            result = await self.session_manager.validate_by_credential(token)
            await self.uow.commit()
            return result
