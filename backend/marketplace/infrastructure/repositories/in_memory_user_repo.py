"""
Name: In-Memory User Repository

Responsibilities:
  - Store users in memory (tests/local dev)
  - Enforce username uniqueness like the users table constraint

Constraints / Notes:
  - Thread-safe access (Lock)
"""

from __future__ import annotations

from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Optional
from uuid import UUID

from ...domain.entities import User
from ...exceptions import UserAlreadyExistsError


class InMemoryUserRepository:
    """R: Thread-safe in-memory user repository."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[UUID, User] = {}

    def save(self, user: User) -> None:
        with self._lock:
            if any(u.username == user.username for u in self._users.values()):
                raise UserAlreadyExistsError()
            if user.created_at is None:
                user.created_at = datetime.now(timezone.utc)
            self._users[user.id] = user

    def get_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.username == username:
                    return user
        return None

    def get_by_id(self, user_id: UUID) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def ping(self) -> bool:
        return True
