"""
Session & License Use Case DTOs
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.app.use_cases.auth.dtos import UserProfile


class SessionUserSummary(BaseModel):
    """Owner of an active session"""

    id: str
    name: str
    email: str


class ActiveSessionInfo(BaseModel):
    """One row of the license usage table"""

    session_id: str
    user: SessionUserSummary
    last_activity: datetime
    ip_address: Optional[str]


class LicenseInfoResponse(BaseModel):
    """Response for license info use case"""

    license_limit: int
    license_used: int
    available: int
    active_sessions: List[ActiveSessionInfo]


class ForceLogoutResponse(BaseModel):
    """Response for force logout use case"""

    message: str
    user_id: str
    sessions_deactivated: int


class TenantSummary(BaseModel):
    id: str
    name: str


class SessionLookupResponse(BaseModel):
    """Response for out-of-band lookup by raw session token"""

    user: UserProfile
    tenant: Optional[TenantSummary]
