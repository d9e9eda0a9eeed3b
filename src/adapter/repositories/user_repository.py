from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.base import utcnow
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = (
            select(User)
            .where(User.email == email)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = (
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def delete(self, user: User) -> None:
        """Physically remove a user"""
        await self.session.delete(user)
        await self.session.flush()

    async def count_active_by_tenant_id(self, tenant_id: UUID) -> int:
        """Count active users of a tenant"""
        stmt = select(func.count(User.id)).where(
            User.tenant_id == tenant_id, User.is_active == True
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def set_current_session(self, user_id: UUID, session_id: UUID) -> None:
        """Point the back-reference at a new session and stamp last_login_at"""
        now = utcnow()
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(current_session_id=session_id, last_login_at=now)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def clear_current_session(
        self, user_id: UUID, session_id: Optional[UUID] = None
    ) -> None:
        """Clear the back-reference; with session_id, only if it still names it"""
        stmt = update(User).where(User.id == user_id)
        if session_id is not None:
            stmt = stmt.where(User.current_session_id == session_id)
        stmt = stmt.values(current_session_id=None)
        await self.session.execute(stmt)
        await self.session.flush()

    async def clear_current_sessions(self, session_ids: List[UUID]) -> int:
        """Clear every back-reference naming one of session_ids"""
        if not session_ids:
            return 0
        stmt = (
            update(User)
            .where(User.current_session_id.in_(session_ids))
            .values(current_session_id=None)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
