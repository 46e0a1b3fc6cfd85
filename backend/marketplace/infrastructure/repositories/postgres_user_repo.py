"""
Name: PostgreSQL User Repository

Responsibilities:
  - Persist users and load them by username or ID
  - Map database rows into User records
  - Map the username unique constraint to UserAlreadyExistsError

Collaborators:
  - psycopg_pool.ConnectionPool (infrastructure.db.stores)
  - domain.repositories.UserRepository
"""

from typing import Optional
from uuid import UUID

from psycopg import errors as pg_errors
from psycopg_pool import ConnectionPool

from ...domain.entities import User
from ...exceptions import PersistenceError, UserAlreadyExistsError
from ...logger import logger

_USER_COLUMNS = "id, username, password_hash, created_at"


def _get_pool() -> ConnectionPool:
    from ..db.stores import get_pool

    return get_pool()


def _row_to_user(row) -> User:
    return User(
        id=row[0],
        username=row[1],
        password_hash=row[2],
        created_at=row[3],
    )


class PostgresUserRepository:
    """R: UserRepository backed by the users table."""

    def __init__(self, pool: ConnectionPool | None = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        return self._pool or _get_pool()

    def save(self, user: User) -> None:
        """R: Insert a new user row."""
        try:
            with self._get_pool().connection() as conn:
                conn.execute(
                    """
                    INSERT INTO users (id, username, password_hash)
                    VALUES (%s, %s, %s)
                    """,
                    (user.id, user.username, user.password_hash),
                )
        except pg_errors.UniqueViolation as e:
            raise UserAlreadyExistsError(original_error=e) from e
        except Exception as e:
            logger.error(f"PostgresUserRepository: Save failed: {e}")
            raise PersistenceError(f"User creation failed: {e}", original_error=e) from e

    def get_by_username(self, username: str) -> Optional[User]:
        """R: Fetch user by username."""
        try:
            with self._get_pool().connection() as conn:
                row = conn.execute(
                    f"SELECT {_USER_COLUMNS} FROM users WHERE username = %s",
                    (username,),
                ).fetchone()
        except Exception as e:
            logger.error(f"PostgresUserRepository: Get by username failed: {e}")
            raise PersistenceError(f"User lookup failed: {e}", original_error=e) from e

        if not row:
            return None
        return _row_to_user(row)

    def get_by_id(self, user_id: UUID) -> Optional[User]:
        """R: Fetch user by ID."""
        try:
            with self._get_pool().connection() as conn:
                row = conn.execute(
                    f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s",
                    (user_id,),
                ).fetchone()
        except Exception as e:
            logger.error(f"PostgresUserRepository: Get by id failed: {e}")
            raise PersistenceError(f"User lookup failed: {e}", original_error=e) from e

        if not row:
            return None
        return _row_to_user(row)

    def ping(self) -> bool:
        """R: Run a trivial query against the pool."""
        with self._get_pool().connection() as conn:
            conn.execute("SELECT 1").fetchone()
        return True
