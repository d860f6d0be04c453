"""Note repository for database operations."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import exists, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..logging import get_logger
from ..models.note import Note

logger = get_logger("repositories.notes")


class NoteRepository:
    """Repository for note database operations.

    Every method is one round trip; nothing here spans a transaction across
    calls.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_notes(self) -> List[Note]:
        """All notes, in whatever order the store returns them."""
        result = await self.session.execute(select(Note))
        return list(result.scalars().all())

    async def get_by_id(self, note_id: UUID) -> Optional[Note]:
        stmt = select(Note).where(Note.id == note_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_title(self, title: str) -> Optional[Note]:
        """Exact, case-sensitive title match."""
        stmt = select(Note).where(Note.title == title)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def has_notes_for_user(self, user_id: UUID) -> bool:
        stmt = select(exists().where(Note.user_id == user_id))
        result = await self.session.execute(stmt)
        return bool(result.scalar())

    async def create_note(self, note_data: dict) -> Note:
        """Insert a note and return it with generated fields loaded."""
        note = Note(**note_data)
        self.session.add(note)
        await self._commit()
        await self.session.refresh(note)
        return note

    async def save_note(self, note: Note) -> Note:
        """Persist changes made to a loaded note."""
        await self._commit()
        await self.session.refresh(note)
        return note

    async def delete_note(self, note: Note) -> None:
        await self.session.delete(note)
        await self._commit()

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            logger.warning(f"Note write rejected by store: {e}")
            await self.session.rollback()
            raise
