from typing import Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.tenant_repository import ITenantRepository
from src.domain.entities import Tenant, User, UserSession


class TenantRepository(ITenantRepository):
    """Tenant repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, tenant_id: UUID) -> Optional[Tenant]:
        """Get tenant by ID"""
        stmt = (
            select(Tenant)
            .where(Tenant.id == tenant_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id_for_update(self, tenant_id: UUID) -> Optional[Tenant]:
        """
        Get tenant by ID with SELECT ... FOR UPDATE.

        SQLite has no row locks and silently drops the clause; there the
        in-process tenant lock is the only serialization point.
        """
        stmt = (
            select(Tenant)
            .where(Tenant.id == tenant_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def update(self, tenant: Tenant) -> Tenant:
        """Update existing tenant"""
        self.session.add(tenant)
        await self.session.flush()
        await self.session.refresh(tenant)
        return tenant

    async def recount_license_used(self, tenant_id: UUID) -> int:
        """
        Recompute license_used from user_sessions in one UPDATE statement.

        The count is evaluated by the database inside the UPDATE itself, so no
        stale value read by this process can be written back.
        """
        active_sessions = (
            select(func.count(UserSession.id))
            .join(User, User.id == UserSession.user_id)
            .where(User.tenant_id == tenant_id, UserSession.is_active == True)
            .scalar_subquery()
        )
        stmt = (
            update(Tenant)
            .where(Tenant.id == tenant_id)
            .values(license_used=active_sessions)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
        await self.session.flush()

        tenant = await self.get_by_id(tenant_id)
        return tenant.license_used if tenant else 0
