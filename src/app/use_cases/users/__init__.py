"""
User Management Use Cases

Account lifecycle hooks that must end sessions.
"""

from .deactivate_user_use_case import DeactivateUserResponse, DeactivateUserUseCase
from .remove_user_use_case import RemoveUserResponse, RemoveUserUseCase

__all__ = [
    "DeactivateUserUseCase",
    "DeactivateUserResponse",
    "RemoveUserUseCase",
    "RemoveUserResponse",
]
