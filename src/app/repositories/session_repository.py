from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import User, UserSession


class ISessionRepository(ABC):
    """Session repository interface - application layer

    Every state-changing method is a single conditional statement so that
    concurrent callers cannot interleave a read and a write.
    """

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[UserSession]:
        """Get session by ID regardless of state"""
        pass

    @abstractmethod
    async def get_active_by_id(
        self, session_id: UUID
    ) -> Optional[Tuple[UserSession, User]]:
        """Get an active session together with its owner"""
        pass

    @abstractmethod
    async def get_active_by_token(
        self, session_token: str
    ) -> Optional[Tuple[UserSession, User]]:
        """Get an active session by its opaque token together with its owner"""
        pass

    @abstractmethod
    async def get_active_by_user_id(self, user_id: UUID) -> List[UserSession]:
        """Get all active sessions of a user (normally zero or one)"""
        pass

    @abstractmethod
    async def create(self, session: UserSession) -> UserSession:
        """Create a new session"""
        pass

    @abstractmethod
    async def touch(self, session_id: UUID, at: datetime) -> bool:
        """Refresh last_activity of an active session. Returns False if inactive."""
        pass

    @abstractmethod
    async def deactivate_by_id(self, session_id: UUID) -> bool:
        """Deactivate one session. Returns True only for the call that flipped it."""
        pass

    @abstractmethod
    async def deactivate_all_by_user_id(self, user_id: UUID) -> List[UUID]:
        """Deactivate every active session of a user. Returns the flipped IDs."""
        pass

    @abstractmethod
    async def find_expired_active(
        self, now: datetime
    ) -> List[Tuple[UUID, Optional[UUID]]]:
        """List (session_id, tenant_id) of active sessions with expires_at < now"""
        pass

    @abstractmethod
    async def deactivate_expired(self, session_ids: List[UUID], now: datetime) -> int:
        """Deactivate the given sessions if still active and expired. Returns count."""
        pass

    @abstractmethod
    async def get_active_by_tenant_id(
        self, tenant_id: UUID
    ) -> List[Tuple[UserSession, User]]:
        """Active sessions of a tenant's users, most recent activity first"""
        pass

    @abstractmethod
    async def delete_by_user_id(self, user_id: UUID) -> int:
        """Physically remove every session of a user. Returns count."""
        pass
