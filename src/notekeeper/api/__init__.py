"""API routers for NoteKeeper."""

from .health import router as health_router
from .notes import router as notes_router
from .users import router as users_router

__all__ = ["notes_router", "users_router", "health_router"]
