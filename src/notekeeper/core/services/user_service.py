"""User service implementation."""

from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ...security import hash_password
from ..exceptions import Conflict, InternalFailure, InvalidArgument, NotFound
from ..logging import get_logger
from ..repositories.note_repository import NoteRepository
from ..repositories.user_repository import UserRepository
from ..schemas.common import MessageResponse
from ..schemas.users import UserCreate, UserDelete, UserResponse, UserUpdate
from ..utils import parse_id
from .interfaces import IUserService

logger = get_logger("services.users")


def _valid_roles(roles) -> bool:
    return bool(roles) and all(isinstance(role, str) and role for role in roles)


class UserService(IUserService):
    """User service implementation.

    Store failures are logged and re-raised as ``InternalFailure``, which the
    API answers with a bare 500.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)
        # Used to refuse deleting users that still own notes
        self.note_repo = NoteRepository(session)
        self.settings = get_settings()

    async def list_users(self) -> List[UserResponse]:
        try:
            users = await self.user_repo.list_users()
        except SQLAlchemyError as e:
            logger.error("Listing users failed", exc_info=e)
            raise InternalFailure() from e
        return [UserResponse.model_validate(user) for user in users]

    async def create_user(self, request: UserCreate) -> MessageResponse:
        roles = request.roles if request.roles is not None else list(self.settings.default_roles)
        if not request.username or not request.password or not _valid_roles(roles):
            raise InvalidArgument("All fields are required")

        try:
            if await self.user_repo.is_username_taken(request.username):
                raise Conflict("Duplicate username")

            user = await self.user_repo.create_user(
                {
                    "username": request.username,
                    "password_hash": hash_password(request.password),
                    "roles": roles,
                    "active": True,
                }
            )
        except IntegrityError as e:
            raise Conflict("Duplicate username") from e
        except SQLAlchemyError as e:
            logger.error("Creating user failed", exc_info=e)
            raise InternalFailure() from e

        logger.info("User created", extra={"user_id": str(user.id)})
        return MessageResponse(message=f"New user {user.username} created")

    async def update_user(self, request: UserUpdate) -> str:
        if (
            not request.id
            or not request.username
            or not _valid_roles(request.roles)
            or not isinstance(request.active, bool)
        ):
            raise InvalidArgument("All fields are required")

        user_id = parse_id(request.id)
        if user_id is None:
            raise InvalidArgument("User ID is not valid")

        try:
            user = await self.user_repo.get_by_id(user_id)
            if not user:
                raise NotFound("User not found")

            # renaming is fine as long as nobody else has the name
            duplicate = await self.user_repo.get_by_username(request.username)
            if duplicate and duplicate.id != user.id:
                raise Conflict("Duplicate username")

            user.username = request.username
            user.roles = list(request.roles)
            user.active = request.active
            if request.password:
                user.password_hash = hash_password(request.password)

            updated = await self.user_repo.save_user(user)
        except IntegrityError as e:
            raise Conflict("Duplicate username") from e
        except SQLAlchemyError as e:
            logger.error("Updating user failed", exc_info=e)
            raise InternalFailure() from e

        logger.info("User updated", extra={"user_id": str(updated.id)})
        return f"{updated.username} updated"

    async def delete_user(self, request: UserDelete) -> str:
        if not request.id:
            raise InvalidArgument("User ID required")

        user_id = parse_id(request.id)
        if user_id is None:
            raise InvalidArgument("User ID is not valid")

        try:
            user = await self.user_repo.get_by_id(user_id)
            if not user:
                raise NotFound("User not found")

            if await self.note_repo.has_notes_for_user(user.id):
                raise Conflict("User has assigned notes")

            username, deleted_id = user.username, user.id
            await self.user_repo.delete_user(user)
        except SQLAlchemyError as e:
            logger.error("Deleting user failed", exc_info=e)
            raise InternalFailure() from e

        logger.info("User deleted", extra={"user_id": str(deleted_id)})
        return f"Username {username} with ID {deleted_id} deleted"
