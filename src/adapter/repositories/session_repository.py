from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import ISessionRepository
from src.domain.entities import User, UserSession


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, session_id: UUID) -> Optional[UserSession]:
        """Get session by ID regardless of state"""
        stmt = (
            select(UserSession)
            .where(UserSession.id == session_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_active_by_id(
        self, session_id: UUID
    ) -> Optional[Tuple[UserSession, User]]:
        """Get an active session together with its owner"""
        stmt = (
            select(UserSession, User)
            .join(User, User.id == UserSession.user_id)
            .where(UserSession.id == session_id, UserSession.is_active == True)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        row = result.first()
        return (row[0], row[1]) if row else None

    async def get_active_by_token(
        self, session_token: str
    ) -> Optional[Tuple[UserSession, User]]:
        """Get an active session by its opaque token together with its owner"""
        stmt = (
            select(UserSession, User)
            .join(User, User.id == UserSession.user_id)
            .where(
                UserSession.session_token == session_token,
                UserSession.is_active == True,
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        row = result.first()
        return (row[0], row[1]) if row else None

    async def get_active_by_user_id(self, user_id: UUID) -> List[UserSession]:
        """Get all active sessions of a user"""
        stmt = (
            select(UserSession)
            .where(UserSession.user_id == user_id, UserSession.is_active == True)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, session_obj: UserSession) -> UserSession:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def touch(self, session_id: UUID, at: datetime) -> bool:
        """Refresh last_activity, only while the session is still active"""
        stmt = (
            update(UserSession)
            .where(UserSession.id == session_id, UserSession.is_active == True)
            .values(last_activity=at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def deactivate_by_id(self, session_id: UUID) -> bool:
        """Deactivate a session; a second caller matches no row"""
        stmt = (
            update(UserSession)
            .where(UserSession.id == session_id, UserSession.is_active == True)
            .values(is_active=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def deactivate_all_by_user_id(self, user_id: UUID) -> List[UUID]:
        """Deactivate every active session of a user"""
        stmt = (
            update(UserSession)
            .where(UserSession.user_id == user_id, UserSession.is_active == True)
            .values(is_active=False)
            .returning(UserSession.id)
        )
        result = await self.session.execute(stmt)
        session_ids = list(result.scalars().all())
        await self.session.flush()
        return session_ids

    async def find_expired_active(
        self, now: datetime
    ) -> List[Tuple[UUID, Optional[UUID]]]:
        """List (session_id, tenant_id) of active sessions past expires_at"""
        stmt = (
            select(UserSession.id, User.tenant_id)
            .join(User, User.id == UserSession.user_id)
            .where(UserSession.is_active == True, UserSession.expires_at < now)
        )
        result = await self.session.exec(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def deactivate_expired(self, session_ids: List[UUID], now: datetime) -> int:
        """Deactivate the given sessions if they are still active and expired"""
        if not session_ids:
            return 0
        stmt = (
            update(UserSession)
            .where(
                UserSession.id.in_(session_ids),
                UserSession.is_active == True,
                UserSession.expires_at < now,
            )
            .values(is_active=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def get_active_by_tenant_id(
        self, tenant_id: UUID
    ) -> List[Tuple[UserSession, User]]:
        """Active sessions of a tenant's users, most recent activity first"""
        stmt = (
            select(UserSession, User)
            .join(User, User.id == UserSession.user_id)
            .where(User.tenant_id == tenant_id, UserSession.is_active == True)
            .order_by(UserSession.last_activity.desc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def delete_by_user_id(self, user_id: UUID) -> int:
        """Physically remove every session of a user"""
        stmt = delete(UserSession).where(UserSession.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
