"""
User schemas.
"""

import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """User creation request."""

    username: Optional[str] = Field(default=None, max_length=50, description="Unique username")
    password: Optional[str] = Field(default=None, description="Plain password, stored hashed")
    roles: Optional[List[str]] = Field(default=None, description="Role names")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"username": "dave", "password": "s3cret!", "roles": ["Employee"]}
        }
    )


class UserUpdate(BaseModel):
    """User update request; password is only changed when given."""

    id: Optional[str] = Field(default=None, description="User ID")
    username: Optional[str] = Field(default=None, max_length=50)
    roles: Optional[List[str]] = None
    # any JSON value; the service rejects non-booleans
    active: Optional[Any] = None
    password: Optional[str] = None


class UserDelete(BaseModel):
    """User deletion request."""

    id: Optional[str] = Field(default=None, description="User ID")


class UserResponse(BaseModel):
    """User as exposed by the API (no password hash)."""

    id: uuid.UUID
    username: str
    roles: List[str]
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
