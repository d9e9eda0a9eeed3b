"""
User Entity

A person working inside exactly one tenant.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from src.domain.base import utcnow
from .enums import UserRole

if TYPE_CHECKING:
    from .tenant import Tenant


class User(SQLModel, table=True):
    """
    User entity - belongs to one tenant.

    Business Rules:
    - Email must be unique across all users
    - Password stored as bcrypt hash
    - Inactive users cannot log in and hold no active session
    - current_session_id mirrors the one active session; the session's
      is_active flag is authoritative
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: Optional[UUID] = Field(default=None, foreign_key="tenants.id", index=True)

    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    role: UserRole = Field(default=UserRole.viewer)
    is_active: bool = Field(default=True)

    # Plain column rather than a FK: users <-> user_sessions would be circular
    current_session_id: Optional[UUID] = Field(default=None, index=True)

    # Timestamps
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, onupdate=utcnow)
    )

    # Relationships
    tenant: Optional["Tenant"] = Relationship(back_populates="users")

    __table_args__ = (Index("idx_user_tenant_active", "tenant_id", "is_active"),)
