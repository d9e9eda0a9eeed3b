"""
Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Role carried in credentials; not evaluated by the session core"""

    admin = "admin"
    lawyer = "lawyer"
    assistant = "assistant"
    viewer = "viewer"
