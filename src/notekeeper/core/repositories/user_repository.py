"""User repository for database operations."""

from typing import Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..logging import get_logger
from ..models.user import User

logger = get_logger("repositories.users")


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_users(self) -> List[User]:
        result = await self.session.execute(select(User))
        return list(result.scalars().all())

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        stmt = select(User).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_ids(self, user_ids: Iterable[UUID]) -> Dict[UUID, User]:
        """Fetch several users in one query, keyed by id.

        Ids with no matching user are simply absent from the result.
        """
        ids = set(user_ids)
        if not ids:
            return {}
        stmt = select(User).where(User.id.in_(ids))
        result = await self.session.execute(stmt)
        return {user.id: user for user in result.scalars()}

    async def get_by_username(self, username: str) -> Optional[User]:
        stmt = select(User).where(User.username == username)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def is_username_taken(self, username: str) -> bool:
        """Check if username exists."""
        return await self.get_by_username(username) is not None

    async def create_user(self, user_data: dict) -> User:
        user = User(**user_data)
        self.session.add(user)
        await self._commit()
        await self.session.refresh(user)
        return user

    async def save_user(self, user: User) -> User:
        await self._commit()
        await self.session.refresh(user)
        return user

    async def delete_user(self, user: User) -> None:
        await self.session.delete(user)
        await self._commit()

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            logger.warning(f"User write rejected by store: {e}")
            await self.session.rollback()
            raise
