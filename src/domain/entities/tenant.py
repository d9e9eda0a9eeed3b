"""
Tenant Entity

An isolated customer organization holding a purchased license count.
"""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint
from sqlmodel import Column, DateTime, Field, Relationship, SQLModel

from config import ApplicationConfig
from src.domain.base import utcnow

if TYPE_CHECKING:
    from .user import User


class Tenant(SQLModel, table=True):
    """
    Tenant entity - customer organization with a license pool.

    Business Rules:
    - license_limit caps concurrently logged-in users
    - license_used is a cached count of active sessions of the tenant's users
    - license_used is recomputed from user_sessions, never incremented
    - license_limit cannot be set below current usage
    """

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)

    license_limit: int = Field(default=ApplicationConfig.DEFAULT_LICENSE_LIMIT)
    license_used: int = Field(default=0)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, onupdate=utcnow)
    )

    # Relationships
    users: list["User"] = Relationship(back_populates="tenant")

    __table_args__ = (
        CheckConstraint("license_limit >= 1", name="ck_tenant_license_limit_positive"),
        CheckConstraint("license_used >= 0", name="ck_tenant_license_used_non_negative"),
    )
