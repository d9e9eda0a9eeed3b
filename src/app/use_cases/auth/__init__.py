"""
Authentication Use Cases

Login, logout, registration and request-path session validation.
"""

from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .register_use_case import RegisterUseCase
from .register_dto import RegisterCommand
from .validate_session_use_case import ValidateSessionUseCase
from .dtos import (
    LoginResponse,
    LogoutResponse,
    RegisterResponse,
    UserProfile,
    build_user_profile,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "LogoutUseCase",
    "RegisterUseCase",
    "ValidateSessionUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "LoginResponse",
    "LogoutResponse",
    "RegisterResponse",
    # DTOs - Nested Models
    "UserProfile",
    "build_user_profile",
]
