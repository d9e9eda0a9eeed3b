"""
UserSession Entity

One authenticated browser/device instance for one user.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import generate_session_token, utcnow


class UserSession(SQLModel, table=True):
    """
    UserSession entity - one login of one user.

    Business Rules:
    - At most one active session per user (enforced by SessionManager)
    - Expires SESSION_TTL_HOURS after creation
    - Deactivation is one-way: an inactive session is never reactivated
    - Rows are soft-deactivated, only removed together with their user
    """

    __tablename__ = "user_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(
        foreign_key="users.id", ondelete="CASCADE", nullable=False, index=True
    )

    session_token: str = Field(
        default_factory=generate_session_token, unique=True, index=True, max_length=64
    )
    ip_address: Optional[str] = Field(default=None, max_length=45)
    user_agent: Optional[str] = None

    is_active: bool = Field(default=True)
    last_activity: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, onupdate=utcnow)
    )

    __table_args__ = (
        Index("idx_session_user_active", "user_id", "is_active"),
        Index("idx_session_active_expires_at", "is_active", "expires_at"),
    )
