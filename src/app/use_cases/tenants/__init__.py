"""Tenant use cases: license pool administration."""

from .update_license_limit_use_case import (
    UpdateLicenseLimitResponse,
    UpdateLicenseLimitUseCase,
)

__all__ = [
    "UpdateLicenseLimitUseCase",
    "UpdateLicenseLimitResponse",
]
