"""
Database models for NoteKeeper.

SQLAlchemy ORM models used through the repository layer with async sessions.

Models included:
    - User: account with username, hashed password, roles and active flag
    - Note: titled text owned by a user, with a completed flag
"""

from .base import BaseModel
from .note import Note
from .user import User

__all__ = [
    "BaseModel",
    "User",
    "Note",
]
