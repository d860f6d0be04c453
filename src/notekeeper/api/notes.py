"""Notes API endpoints."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.common import ErrorResponse, MessageResponse
from ..core.schemas.notes import NoteCreate, NoteDelete, NoteResponse, NoteUpdate
from ..core.services import NoteService
from ..database import get_db_session

router = APIRouter(
    prefix="/notes",
    tags=["notes"],
    responses={400: {"model": ErrorResponse}},
)


@router.get("", response_model=List[NoteResponse])
async def list_notes(session: AsyncSession = Depends(get_db_session)):
    """List all notes with their owner's username."""
    note_service = NoteService(session)
    return await note_service.list_notes()


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(note_id: str, session: AsyncSession = Depends(get_db_session)):
    """Get a specific note."""
    note_service = NoteService(session)
    return await note_service.get_note(note_id)


@router.post(
    "",
    response_model=MessageResponse,
    status_code=201,
    responses={409: {"model": ErrorResponse}},
)
async def create_note(request: NoteCreate, session: AsyncSession = Depends(get_db_session)):
    """Create a new note."""
    note_service = NoteService(session)
    return await note_service.create_note(request)


@router.patch("", response_model=str, responses={409: {"model": ErrorResponse}})
async def update_note(request: NoteUpdate, session: AsyncSession = Depends(get_db_session)):
    """Update a note; the id travels in the body."""
    note_service = NoteService(session)
    return await note_service.update_note(request)


@router.delete("", response_model=str)
async def delete_note(request: NoteDelete, session: AsyncSession = Depends(get_db_session)):
    """Delete a note; the id travels in the body."""
    note_service = NoteService(session)
    return await note_service.delete_note(request)
