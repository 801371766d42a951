"""
User Use Cases
"""

from .load_current_user_use_case import CurrentUser, LoadCurrentUserUseCase

__all__ = [
    "CurrentUser",
    "LoadCurrentUserUseCase",
]
