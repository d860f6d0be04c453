"""
User model.
"""

from typing import List

from sqlalchemy import Boolean, CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel
from .types import StringListType


class User(BaseModel):
    """User account; notes point at it through ``Note.user_id``."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    roles: Mapped[List[str]] = mapped_column(
        StringListType, nullable=False, default=lambda: ["Employee"]
    )
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    __table_args__ = (
        CheckConstraint("length(username) <= 50", name="ck_users_username_len"),
    )

    def __repr__(self) -> str:
        return f"<User(username='{self.username}')>"
