"""Small helpers shared by the services."""

from typing import Optional
from uuid import UUID


def parse_id(value: Optional[str]) -> Optional[UUID]:
    """Parse a record id, returning None when it is not a well-formed UUID."""
    if not isinstance(value, str):
        return None
    try:
        return UUID(value)
    except ValueError:
        return None
