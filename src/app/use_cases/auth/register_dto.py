"""
Register Use Case DTOs

RegisterCommand is built by the API layer once the HTTP payload is valid.
"""

from pydantic import BaseModel

from src.domain.entities import UserRole


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Contains only business-relevant data (no HTTP concerns).
    """

    name: str
    email: str
    password: str
    role: UserRole = UserRole.viewer
