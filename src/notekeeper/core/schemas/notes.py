"""
Note schemas.
"""

import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class NoteCreate(BaseModel):
    """Note creation request."""

    user: Optional[str] = Field(default=None, description="Owning user ID")
    title: Optional[str] = Field(default=None, max_length=200, description="Unique note title")
    text: Optional[str] = Field(default=None, description="Note body")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "user": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Groceries",
                "text": "milk",
            }
        }
    )


class NoteUpdate(BaseModel):
    """Note update request; every field replaces the stored one."""

    id: Optional[str] = Field(default=None, description="Note ID")
    user: Optional[str] = Field(default=None, description="Owning user ID")
    title: Optional[str] = Field(default=None, max_length=200, description="Unique note title")
    text: Optional[str] = Field(default=None, description="Note body")
    # any JSON value; the service rejects non-booleans
    completed: Optional[Any] = Field(default=None, description="Completion flag")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "9b2f5c1e-8a43-4f7e-9a55-0e3d7c1b2a10",
                "user": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Groceries",
                "text": "milk, eggs",
                "completed": True,
            }
        }
    )


class NoteDelete(BaseModel):
    """Note deletion request."""

    id: Optional[str] = Field(default=None, description="Note ID")


class NoteResponse(BaseModel):
    """Note with its owner's username joined in."""

    id: uuid.UUID = Field(description="Note unique identifier")
    user: uuid.UUID = Field(description="Owning user ID")
    title: str
    text: str
    completed: bool
    created_at: datetime
    updated_at: datetime
    username: Optional[str] = Field(
        default=None, description="Owner username, null when the user no longer exists"
    )
