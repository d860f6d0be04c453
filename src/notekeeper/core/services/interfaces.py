"""
Service interfaces for NoteKeeper.
"""

from abc import ABC, abstractmethod
from typing import List

from ..schemas.common import HealthCheckResponse, MessageResponse
from ..schemas.notes import NoteCreate, NoteDelete, NoteResponse, NoteUpdate
from ..schemas.users import UserCreate, UserDelete, UserResponse, UserUpdate


class INoteService(ABC):
    """Note validation, title uniqueness and username join."""

    @abstractmethod
    async def list_notes(self) -> List[NoteResponse]:
        """All notes with their owner's username."""
        pass

    @abstractmethod
    async def get_note(self, note_id: str) -> NoteResponse:
        """One note with its owner's username."""
        pass

    @abstractmethod
    async def create_note(self, request: NoteCreate) -> MessageResponse:
        """Create a note with a title no other note uses."""
        pass

    @abstractmethod
    async def update_note(self, request: NoteUpdate) -> str:
        """Replace every field of an existing note."""
        pass

    @abstractmethod
    async def delete_note(self, request: NoteDelete) -> str:
        """Remove a note for good."""
        pass


class IUserService(ABC):
    """User CRUD."""

    @abstractmethod
    async def list_users(self) -> List[UserResponse]:
        """All users."""
        pass

    @abstractmethod
    async def create_user(self, request: UserCreate) -> MessageResponse:
        """Create a user with a unique username."""
        pass

    @abstractmethod
    async def update_user(self, request: UserUpdate) -> str:
        """Update a user, password only when given."""
        pass

    @abstractmethod
    async def delete_user(self, request: UserDelete) -> str:
        """Delete a user that owns no notes."""
        pass


class IHealthService(ABC):
    """Health check service."""

    @abstractmethod
    async def check_database_health(self) -> HealthCheckResponse:
        """Check DB connection."""
        pass
