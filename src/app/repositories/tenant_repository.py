from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Tenant


class ITenantRepository(ABC):
    """Tenant repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, tenant_id: UUID) -> Optional[Tenant]:
        """Get tenant by ID"""
        pass

    @abstractmethod
    async def get_by_id_for_update(self, tenant_id: UUID) -> Optional[Tenant]:
        """Get tenant by ID holding a row lock until the transaction ends"""
        pass

    @abstractmethod
    async def update(self, tenant: Tenant) -> Tenant:
        """Update existing tenant"""
        pass

    @abstractmethod
    async def recount_license_used(self, tenant_id: UUID) -> int:
        """Overwrite license_used with the live count of active sessions. Returns it."""
        pass
