"""Note service implementation."""

from typing import List, Optional

from sqlalchemy.exc import DataError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import Conflict, InvalidArgument, NotFound
from ..logging import get_logger
from ..models.note import Note
from ..models.user import User
from ..repositories.note_repository import NoteRepository
from ..repositories.user_repository import UserRepository
from ..schemas.common import MessageResponse
from ..schemas.notes import NoteCreate, NoteDelete, NoteResponse, NoteUpdate
from ..utils import parse_id
from .interfaces import INoteService

logger = get_logger("services.notes")


class NoteService(INoteService):
    """Note service implementation.

    Title uniqueness is checked with a lookup before every write; the unique
    constraint on ``notes.title`` catches whatever slips between the lookup
    and the write, and both paths end in the same ``Conflict``.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)
        # Used to join the owner's username onto reads
        self.user_repo = UserRepository(session)

    async def list_notes(self) -> List[NoteResponse]:
        """List every note with its owner's username.

        Owners are fetched in a single batched query. A note whose owner is
        gone comes back with ``username=None``.
        """
        notes = await self.note_repo.list_notes()
        if not notes:
            raise NotFound("No notes found")

        users = await self.user_repo.get_by_ids(note.user_id for note in notes)
        return [self._note_to_response(note, users.get(note.user_id)) for note in notes]

    async def get_note(self, note_id: str) -> NoteResponse:
        """Get one note; a malformed id is rejected before touching the store."""
        note_uuid = parse_id(note_id)
        if note_uuid is None:
            raise InvalidArgument("Note ID is not valid")

        note = await self.note_repo.get_by_id(note_uuid)
        if not note:
            raise NotFound("Note not found")

        user = await self.user_repo.get_by_id(note.user_id)
        if not user:
            raise NotFound("User referenced by note not found")

        return self._note_to_response(note, user)

    async def create_note(self, request: NoteCreate) -> MessageResponse:
        """Create a note, ``completed`` starts out false."""
        if not request.user or not request.title or not request.text:
            raise InvalidArgument("All fields are required")

        user_id = parse_id(request.user)
        if user_id is None:
            raise InvalidArgument("Invalid note data received")

        if await self.note_repo.get_by_title(request.title):
            raise Conflict("Duplicate note title")

        note_data = {
            "user_id": user_id,
            "title": request.title,
            "text": request.text,
            "completed": False,
        }
        try:
            note = await self.note_repo.create_note(note_data)
        except IntegrityError as e:
            raise Conflict("Duplicate note title") from e
        except DataError as e:
            raise InvalidArgument("Invalid note data received") from e

        logger.info("Note created", extra={"note_id": str(note.id), "user_id": str(user_id)})
        return MessageResponse(message="New note created")

    async def update_note(self, request: NoteUpdate) -> str:
        """Replace user, title, text and completed on an existing note."""
        if (
            not request.id
            or not request.user
            or not request.title
            or not request.text
            or not isinstance(request.completed, bool)
        ):
            raise InvalidArgument("All fields are required")

        note_id = parse_id(request.id)
        if note_id is None:
            raise InvalidArgument("Note ID is not valid")
        user_id = parse_id(request.user)
        if user_id is None:
            raise InvalidArgument("Invalid note data received")

        note = await self.note_repo.get_by_id(note_id)
        if not note:
            raise NotFound("Note not found")

        # a note may keep its own title
        duplicate = await self.note_repo.get_by_title(request.title)
        if duplicate and duplicate.id != note.id:
            raise Conflict("Duplicate note title")

        note.user_id = user_id
        note.title = request.title
        note.text = request.text
        note.completed = request.completed

        try:
            updated = await self.note_repo.save_note(note)
        except IntegrityError as e:
            raise Conflict("Duplicate note title") from e
        except DataError as e:
            raise InvalidArgument("Invalid note data received") from e

        logger.info("Note updated", extra={"note_id": str(updated.id)})
        return f"'{updated.title}' updated"

    async def delete_note(self, request: NoteDelete) -> str:
        """Delete a note. Nothing else is touched."""
        if not request.id:
            raise InvalidArgument("Note ID required")

        note_id = parse_id(request.id)
        if note_id is None:
            raise InvalidArgument("Note ID is not valid")

        note = await self.note_repo.get_by_id(note_id)
        if not note:
            raise NotFound("Note not found")

        title, deleted_id = note.title, note.id
        await self.note_repo.delete_note(note)

        logger.info("Note deleted", extra={"note_id": str(deleted_id)})
        return f"Note '{title}' with ID {deleted_id} deleted"

    def _note_to_response(self, note: Note, user: Optional[User]) -> NoteResponse:
        return NoteResponse(
            id=note.id,
            user=note.user_id,
            title=note.title,
            text=note.text,
            completed=note.completed,
            created_at=note.created_at,
            updated_at=note.updated_at,
            username=user.username if user else None,
        )
