"""
Name: Get User Use Case

Responsibilities:
  - Resolve a user by ID (ad authorship)
"""

from uuid import UUID

from ...domain.entities import User
from ...domain.repositories import UserRepository
from ...exceptions import UserNotFoundError


class GetUserUseCase:
    """R: Fetch a user by ID or fail with UserNotFoundError."""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    def execute(self, user_id: UUID) -> User:
        user = self.repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError("user with this id does not exist")
        return user
