"""
Name: Domain Repository Interfaces

Responsibilities:
  - Define contracts for user and ad persistence
  - Provide abstraction over storage technology (PostgreSQL, MongoDB, memory)

Collaborators:
  - domain.entities: User, Ad, ListOptions
  - Implementations in infrastructure.repositories

Constraints:
  - Pure interfaces (Protocol), no implementation
  - Storage faults surface as PersistenceError

Notes:
  - Using typing.Protocol for structural subtyping (duck typing)
  - Enables testing with mock repositories
"""

from typing import List, Optional, Protocol
from uuid import UUID

from .entities import Ad, ListOptions, User


class UserRepository(Protocol):
    """R: Interface for user persistence (owned by the credential flows)."""

    def save(self, user: User) -> None:
        """
        R: Persist a new user.

        Raises:
            UserAlreadyExistsError: If the store rejects a duplicate username
            PersistenceError: On storage failure
        """
        ...

    def get_by_username(self, username: str) -> Optional[User]:
        """R: Fetch user by username, or None."""
        ...

    def get_by_id(self, user_id: UUID) -> Optional[User]:
        """R: Fetch user by ID, or None."""
        ...

    def ping(self) -> bool:
        """R: Check store connectivity."""
        ...


class AdRepository(Protocol):
    """R: Interface for ad persistence (owned by the ad catalog)."""

    def save(self, ad: Ad) -> None:
        """
        R: Persist a new ad.

        Raises:
            PersistenceError: On storage failure
        """
        ...

    def find_all(self, options: ListOptions) -> List[Ad]:
        """
        R: List ads matching the options' price bounds, sorted and paged.

        Returns:
            The page of ads; empty when nothing matches

        Raises:
            PersistenceError: On storage failure
        """
        ...

    def ping(self) -> bool:
        """R: Check store connectivity."""
        ...
