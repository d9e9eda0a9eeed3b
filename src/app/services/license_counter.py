"""
License Counter

Keeps Tenant.license_used equal to the number of active sessions owned by
the tenant's users.
"""

import logging
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Tenant

logger = logging.getLogger(__name__)


class LicenseCounter:
    """
    Derived per-tenant count of active sessions.

    Business Rules:
    - recount writes the exact live count, never a delta
    - recount is idempotent and safe to run from concurrent callers
    - Must run after every change that adds or removes an active session,
      scoped to the affected tenant only
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def recount(self, tenant_id: UUID) -> int:
        """
        Recompute license_used for one tenant.

        Args:
            tenant_id: Tenant whose counter is rewritten

        Returns:
            The value now stored in license_used
        """
        used = await self.uow.tenants.recount_license_used(tenant_id)
        logger.debug("Tenant %s license_used recounted to %s", tenant_id, used)
        return used

    @staticmethod
    def available_slots(tenant: Tenant) -> int:
        return max(0, tenant.license_limit - tenant.license_used)
