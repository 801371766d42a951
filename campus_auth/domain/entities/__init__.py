"""
Campus Auth Domain Entities

All domain entities organized by model.
"""

from .enums import UserRole
from .user import User

__all__ = [
    "UserRole",
    "User",
]
