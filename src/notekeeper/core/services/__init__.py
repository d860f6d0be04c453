"""
Service layer: interfaces and their implementations.
"""

from .interfaces import IHealthService, INoteService, IUserService
from .health_service import HealthService
from .note_service import NoteService
from .user_service import UserService

__all__ = [
    # Interfaces
    "INoteService",
    "IUserService",
    "IHealthService",

    # Implementations
    "NoteService",
    "UserService",
    "HealthService",
]
