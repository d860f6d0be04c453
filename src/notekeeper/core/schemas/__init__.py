"""
Pydantic schemas for API requests and responses.

Request schemas keep every field optional: presence and emptiness are
checked by the services so the rules hold no matter how they are called.
"""

from .common import ErrorResponse, MessageResponse
from .notes import NoteCreate, NoteDelete, NoteResponse, NoteUpdate
from .users import UserCreate, UserDelete, UserResponse, UserUpdate

__all__ = [
    # Note schemas
    "NoteCreate",
    "NoteUpdate",
    "NoteDelete",
    "NoteResponse",
    # User schemas
    "UserCreate",
    "UserUpdate",
    "UserDelete",
    "UserResponse",
    # Common schemas
    "MessageResponse",
    "ErrorResponse",
]
