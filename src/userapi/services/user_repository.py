"""
User repository - data access for the users table

PostgresUserRepository is the production implementation; InMemoryUserRepository
keeps rows in the instance and is used for local runs and tests.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional

import asyncpg

from userapi.models.user import User
from userapi.utils.exceptions import ConflictError, StoreError

logger = logging.getLogger(__name__)

EMAIL_EXISTS_MESSAGE = "Email already exists"

# Failures that mean the store could not answer, as opposed to a constraint violation
STORE_FAILURES = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)

# users.id is SERIAL (int4); ids outside this range cannot match a row
USER_ID_MIN = -2**31
USER_ID_MAX = 2**31 - 1


class UserRepository(ABC):
    """CRUD operations over user records"""

    @abstractmethod
    async def find_all(self) -> List[User]:
        """All users ordered by id ascending"""

    @abstractmethod
    async def find_by_id(self, user_id: int) -> Optional[User]:
        ...

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    async def create(self, name: str, email: str) -> User:
        """Insert a user; raises ConflictError when the email is taken"""

    @abstractmethod
    async def update(self, user_id: int, name: str, email: str) -> Optional[User]:
        """Replace name and email; None when no row matches"""

    @abstractmethod
    async def delete(self, user_id: int) -> bool:
        """True if a row was removed, False if nothing matched"""


class PostgresUserRepository(UserRepository):
    """User repository backed by an asyncpg pool"""

    def __init__(self, pool: Optional[asyncpg.Pool]):
        self._pool = pool

    @staticmethod
    def _id_in_range(user_id: int) -> bool:
        return USER_ID_MIN <= user_id <= USER_ID_MAX

    def _require_pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise StoreError("Database pool not initialized")
        return self._pool

    async def _fetch(self, query: str, *params: Any) -> List[asyncpg.Record]:
        pool = self._require_pool()
        try:
            async with pool.acquire() as conn:
                return await conn.fetch(query, *params)
        except STORE_FAILURES as e:
            logger.error(f"Database error during read: {e}")
            raise StoreError(f"Database query failed: {e}") from e

    async def _fetchrow(self, query: str, *params: Any) -> Optional[asyncpg.Record]:
        pool = self._require_pool()
        try:
            async with pool.acquire() as conn:
                return await conn.fetchrow(query, *params)
        except STORE_FAILURES as e:
            logger.error(f"Database error during read: {e}")
            raise StoreError(f"Database query failed: {e}") from e

    async def _write_row(self, query: str, *params: Any) -> Optional[asyncpg.Record]:
        """Run a single-row write inside a transaction, mapping unique violations"""
        pool = self._require_pool()
        try:
            async with pool.acquire() as conn:
                async with conn.transaction():
                    return await conn.fetchrow(query, *params)
        except asyncpg.UniqueViolationError as e:
            logger.warning(f"Unique constraint violation: {e}")
            raise ConflictError(EMAIL_EXISTS_MESSAGE) from e
        except STORE_FAILURES as e:
            logger.error(f"Database error during write: {e}")
            raise StoreError(f"Database write failed: {e}") from e

    async def find_all(self) -> List[User]:
        rows = await self._fetch("SELECT id, name, email FROM users ORDER BY id ASC")
        return [User(**dict(row)) for row in rows]

    async def find_by_id(self, user_id: int) -> Optional[User]:
        if not self._id_in_range(user_id):
            return None
        row = await self._fetchrow("SELECT id, name, email FROM users WHERE id = $1", user_id)
        return User(**dict(row)) if row else None

    async def find_by_email(self, email: str) -> Optional[User]:
        row = await self._fetchrow("SELECT id, name, email FROM users WHERE email = $1", email)
        return User(**dict(row)) if row else None

    async def create(self, name: str, email: str) -> User:
        row = await self._write_row(
            "INSERT INTO users (name, email) VALUES ($1, $2) RETURNING id, name, email",
            name, email
        )
        if not row:
            raise StoreError("Insert operation failed - no data returned")

        logger.info(f"Created user {row['id']}")
        return User(**dict(row))

    async def update(self, user_id: int, name: str, email: str) -> Optional[User]:
        if not self._id_in_range(user_id):
            return None
        row = await self._write_row(
            "UPDATE users SET name = $1, email = $2 WHERE id = $3 RETURNING id, name, email",
            name, email, user_id
        )
        return User(**dict(row)) if row else None

    async def delete(self, user_id: int) -> bool:
        if not self._id_in_range(user_id):
            return False
        pool = self._require_pool()
        try:
            async with pool.acquire() as conn:
                async with conn.transaction():
                    result = await conn.execute("DELETE FROM users WHERE id = $1", user_id)
        except STORE_FAILURES as e:
            logger.error(f"Database error during DELETE: {e}")
            raise StoreError(f"Database DELETE failed: {e}") from e

        # asyncpg returns "DELETE N" where N is the number of rows
        deleted_count = int(result.split()[-1]) if result else 0
        return deleted_count > 0


class InMemoryUserRepository(UserRepository):
    """
    Process-local user repository

    Rows and the id counter belong to the instance. Each method runs without
    awaiting, so on a single event loop every call is atomic.
    """

    def __init__(self):
        self._users: List[User] = []
        self._next_id = 1

    def _index_of(self, user_id: int) -> Optional[int]:
        for index, user in enumerate(self._users):
            if user.id == user_id:
                return index
        return None

    async def find_all(self) -> List[User]:
        # Ids are assigned increasingly and appended, so the list stays ordered
        return [user.model_copy() for user in self._users]

    async def find_by_id(self, user_id: int) -> Optional[User]:
        index = self._index_of(user_id)
        return self._users[index].model_copy() if index is not None else None

    async def find_by_email(self, email: str) -> Optional[User]:
        for user in self._users:
            if user.email == email:
                return user.model_copy()
        return None

    async def create(self, name: str, email: str) -> User:
        if any(user.email == email for user in self._users):
            raise ConflictError(EMAIL_EXISTS_MESSAGE)

        user = User(id=self._next_id, name=name, email=email)
        self._next_id += 1
        self._users.append(user)
        return user.model_copy()

    async def update(self, user_id: int, name: str, email: str) -> Optional[User]:
        index = self._index_of(user_id)
        if index is None:
            return None
        if any(user.email == email and user.id != user_id for user in self._users):
            raise ConflictError(EMAIL_EXISTS_MESSAGE)

        self._users[index] = User(id=user_id, name=name, email=email)
        return self._users[index].model_copy()

    async def delete(self, user_id: int) -> bool:
        index = self._index_of(user_id)
        if index is None:
            return False
        del self._users[index]
        return True


# Global repository instance, chosen at application startup
_user_repository: Optional[UserRepository] = None

def set_user_repository(repository: Optional[UserRepository]):
    """Install the repository used by the API"""
    global _user_repository
    _user_repository = repository

def get_user_repository() -> UserRepository:
    """Get the global user repository instance"""
    if _user_repository is None:
        raise StoreError("User repository not initialized")
    return _user_repository
