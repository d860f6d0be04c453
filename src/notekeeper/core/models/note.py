# Note model
import uuid

from sqlalchemy import Boolean, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel
from .types import GUID


class Note(BaseModel):
    """Note owned by a user.

    ``user_id`` is a plain reference, not a foreign key: a note may outlive
    the user it points at, and readers have to cope with that.
    """

    __tablename__ = "notes"

    user_id: Mapped[uuid.UUID] = mapped_column(GUID(), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    __table_args__ = (
        # backstop for the pre-write title lookup
        UniqueConstraint("title", name="uq_notes_title"),
        Index("idx_notes_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<Note(title='{truncated}', user_id={self.user_id})>"
