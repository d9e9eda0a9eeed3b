"""
Use Cases

Organized into domain folders:
- auth/: Login, logout, registration, request validation
- sessions/: Forced logout, license info, expiry sweep, token lookup
- tenants/: License limit administration
- users/: Account deactivation and removal
"""

from .auth import (
    LoginUseCase,
    LogoutUseCase,
    RegisterCommand,
    RegisterUseCase,
    ValidateSessionUseCase,
)
from .sessions import (
    ForceLogoutUseCase,
    GetLicenseInfoUseCase,
    LookupSessionUseCase,
    SweepExpiredSessionsUseCase,
)
from .tenants import UpdateLicenseLimitUseCase
from .users import DeactivateUserUseCase, RemoveUserUseCase

__all__ = [
    # Auth
    "LoginUseCase",
    "LogoutUseCase",
    "RegisterCommand",
    "RegisterUseCase",
    "ValidateSessionUseCase",
    # Sessions
    "ForceLogoutUseCase",
    "GetLicenseInfoUseCase",
    "LookupSessionUseCase",
    "SweepExpiredSessionsUseCase",
    # Tenants
    "UpdateLicenseLimitUseCase",
    # Users
    "DeactivateUserUseCase",
    "RemoveUserUseCase",
]
