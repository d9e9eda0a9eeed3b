"""
Session & License Use Cases

Forced logout, license reporting, expiry sweep and token lookup.
"""

from .force_logout_use_case import ForceLogoutUseCase
from .get_license_info_use_case import GetLicenseInfoUseCase
from .lookup_session_use_case import LookupSessionUseCase
from .sweep_expired_sessions_use_case import SweepExpiredSessionsUseCase
from .dtos import (
    ActiveSessionInfo,
    ForceLogoutResponse,
    LicenseInfoResponse,
    SessionLookupResponse,
    SessionUserSummary,
    TenantSummary,
)

__all__ = [
    # Use Cases
    "ForceLogoutUseCase",
    "GetLicenseInfoUseCase",
    "LookupSessionUseCase",
    "SweepExpiredSessionsUseCase",
    # DTOs
    "ActiveSessionInfo",
    "ForceLogoutResponse",
    "LicenseInfoResponse",
    "SessionLookupResponse",
    "SessionUserSummary",
    "TenantSummary",
]
