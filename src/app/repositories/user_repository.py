from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def delete(self, user: User) -> None:
        """Physically remove a user"""
        pass

    @abstractmethod
    async def count_active_by_tenant_id(self, tenant_id: UUID) -> int:
        """Count active users of a tenant"""
        pass

    @abstractmethod
    async def set_current_session(self, user_id: UUID, session_id: UUID) -> None:
        """Point the user's back-reference at a session and stamp last_login_at"""
        pass

    @abstractmethod
    async def clear_current_session(
        self, user_id: UUID, session_id: Optional[UUID] = None
    ) -> None:
        """Clear the back-reference, only if it still names session_id when given"""
        pass

    @abstractmethod
    async def clear_current_sessions(self, session_ids: List[UUID]) -> int:
        """Clear every back-reference naming one of session_ids. Returns count."""
        pass
