"""
Use Case: Update License Limit

Billing/admin integration endpoint changing a tenant's purchased license count.
"""

from uuid import UUID
from pydantic import BaseModel

from src.app.services.license_counter import LicenseCounter
from src.app.services.session_manager import tenant_lock
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return


class UpdateLicenseLimitResponse(BaseModel):
    """Response DTO for UpdateLicenseLimitUseCase"""

    tenant_id: str
    license_limit: int
    license_used: int
    available: int


class UpdateLicenseLimitUseCase:
    """
    Set a tenant's license_limit.

    Business Logic:
    1. Reject limits below 1
    2. Lock the tenant and recount license_used from live sessions
    3. Reject limits below current usage
    4. Persist the new limit
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, tenant_id: UUID, license_limit: int
    ) -> Result[UpdateLicenseLimitResponse]:
        if license_limit < 1:
            return Return.err(
                Error("INVALID_LICENSE_LIMIT", "License limit must be at least 1")
            )

        async with self.uow:
            # Unknown ids must not leave an entry in the lock registry
            if await self.uow.tenants.get_by_id(tenant_id) is None:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            async with tenant_lock(tenant_id):
                tenant = await self.uow.tenants.get_by_id_for_update(tenant_id)
                if not tenant:
                    return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

                used = await LicenseCounter(self.uow).recount(tenant_id)
                if license_limit < used:
                    return Return.err(
                        Error(
                            "LICENSE_LIMIT_BELOW_USAGE",
                            f"License limit cannot be lower than the {used} "
                            f"licenses currently in use",
                        )
                    )

                tenant.license_limit = license_limit
                tenant = await self.uow.tenants.update(tenant)
                await self.uow.commit()

            return Return.ok(
                UpdateLicenseLimitResponse(
                    tenant_id=str(tenant.id),
                    license_limit=tenant.license_limit,
                    license_used=tenant.license_used,
                    available=LicenseCounter.available_slots(tenant),
                )
            )
