"""Users API endpoints."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.common import ErrorResponse, MessageResponse
from ..core.schemas.users import UserCreate, UserDelete, UserResponse, UserUpdate
from ..core.services import UserService
from ..database import get_db_session

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)


@router.get("", response_model=List[UserResponse])
async def list_users(session: AsyncSession = Depends(get_db_session)):
    """List all users."""
    user_service = UserService(session)
    return await user_service.list_users()


@router.post("", response_model=MessageResponse, status_code=201)
async def create_user(request: UserCreate, session: AsyncSession = Depends(get_db_session)):
    """Create a new user."""
    user_service = UserService(session)
    return await user_service.create_user(request)


@router.patch("", response_model=str)
async def update_user(request: UserUpdate, session: AsyncSession = Depends(get_db_session)):
    """Update a user."""
    user_service = UserService(session)
    return await user_service.update_user(request)


@router.delete("", response_model=str)
async def delete_user(request: UserDelete, session: AsyncSession = Depends(get_db_session)):
    """Delete a user that owns no notes."""
    user_service = UserService(session)
    return await user_service.delete_user(request)
