"""
Campus Auth Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Portal role assigned at account creation"""

    ADMIN = "ADMIN"
    TEACHER = "TEACHER"
    USER = "USER"
