"""
Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import UserRole

# Export all entities
from .tenant import Tenant
from .user import User
from .session import UserSession

__all__ = [
    # Enums
    "UserRole",
    # Entities
    "Tenant",
    "User",
    "UserSession",
]
