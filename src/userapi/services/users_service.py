"""
Users service - business logic for user management
"""

import logging
from typing import List, Optional

from userapi.models.user import User
from userapi.services.user_repository import UserRepository, EMAIL_EXISTS_MESSAGE
from userapi.services.validation import validate_user_request
from userapi.utils.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

USER_NOT_FOUND_MESSAGE = "User not found"


class UsersService:
    """Service for user management operations"""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def list_users(self) -> List[User]:
        return await self.repository.find_all()

    async def get_user(self, user_id: int) -> User:
        """
        Get a user by its ID

        Raises:
            NotFoundError: if no user has this id
        """
        user = await self.repository.find_by_id(user_id)
        if user is None:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)
        return user

    async def create_user(self, name: Optional[str], email: Optional[str]) -> User:
        """
        Create a new user

        Args:
            name: Name of the user
            email: Email address of the user, unique across users

        Returns:
            The created user with its assigned id

        Raises:
            ValidationError: if name or email are malformed
            ConflictError: if the email is already registered
        """
        name, email = validate_user_request(name, email)

        # Fast path only; the store's unique constraint is what actually decides
        if await self.repository.find_by_email(email) is not None:
            raise ConflictError(EMAIL_EXISTS_MESSAGE)

        logger.info(f"Creating new user: {email}")
        return await self.repository.create(name, email)

    async def update_user(self, user_id: int, name: Optional[str], email: Optional[str]) -> User:
        """
        Replace a user's name and email

        Raises:
            ValidationError: if name or email are malformed
            ConflictError: if another user already has the email
            NotFoundError: if no user has this id
        """
        name, email = validate_user_request(name, email)

        existing = await self.repository.find_by_email(email)
        if existing is not None and existing.id != user_id:
            raise ConflictError(EMAIL_EXISTS_MESSAGE)

        user = await self.repository.update(user_id, name, email)
        if user is None:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)

        logger.info(f"Updated user {user_id}")
        return user

    async def delete_user(self, user_id: int):
        """
        Hard-delete a user

        Raises:
            NotFoundError: if no user has this id, including one already deleted
        """
        if not await self.repository.delete(user_id):
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)
        logger.info(f"Deleted user {user_id}")
