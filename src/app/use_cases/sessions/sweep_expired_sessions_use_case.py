"""
Sweep Expired Sessions Use Case

Maintenance job; triggered externally (scheduler or admin endpoint).
"""

from typing import Optional

from src.app.services.session_manager import SessionManager, SweepReport
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return


class SweepExpiredSessionsUseCase:
    """
    Deactivate every expired-but-active session.

    Idempotent: a second run right after the first deactivates nothing.
    """

    def __init__(self, uow: UnitOfWork, session_manager: Optional[SessionManager] = None):
        self.uow = uow
        self.session_manager = session_manager or SessionManager(uow)

    async def execute(self) -> Result[SweepReport]:
        async with self.uow:
            report = await self.session_manager.sweep_expired()
            await self.uow.commit()
            return Return.ok(report)
