"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import User, UserRole


# ============================================================================
# Response DTOs
# ============================================================================


class UserProfile(BaseModel):
    """Sanitized user profile - never carries the password hash"""

    id: str
    name: str
    email: str
    role: str
    tenant_id: Optional[str]
    is_active: bool
    last_login_at: Optional[datetime]


class LoginResponse(BaseModel):
    """Response for user login use case"""

    access_token: str
    session_token: str
    session_id: str
    expires_at: datetime
    user: UserProfile


class RegisterResponse(BaseModel):
    """Response for user registration use case"""

    access_token: str
    session_token: str
    session_id: str
    user: UserProfile


class LogoutResponse(BaseModel):
    """Response for logout use case"""

    message: str
    deactivated: bool


def build_user_profile(user: User) -> UserProfile:
    return UserProfile(
        id=str(user.id),
        name=user.name,
        email=user.email,
        role=UserRole(user.role).value,
        tenant_id=str(user.tenant_id) if user.tenant_id else None,
        is_active=user.is_active,
        last_login_at=user.last_login_at,
    )
