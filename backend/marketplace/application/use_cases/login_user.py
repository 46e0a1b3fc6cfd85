"""
Name: Login User Use Case

Responsibilities:
  - Resolve the user by username
  - Verify the password against the stored hash
  - Issue a fresh, independent session token

Collaborators:
  - domain.repositories.UserRepository
  - auth_users.verify_password / create_access_token (injected)
"""

from typing import Callable

from ...domain.entities import User
from ...domain.repositories import UserRepository
from ...exceptions import InvalidPasswordError, UserNotFoundError


class LoginUserUseCase:
    """R: Authenticate credentials and return a session token."""

    def __init__(
        self,
        repository: UserRepository,
        password_verifier: Callable[[str, str], bool],
        token_issuer: Callable[[User], str],
    ):
        self.repository = repository
        self.password_verifier = password_verifier
        self.token_issuer = token_issuer

    def execute(self, *, username: str, password: str) -> str:
        user = self.repository.get_by_username(username)
        if user is None:
            raise UserNotFoundError("user with this username does not exist")

        if not self.password_verifier(password, user.password_hash):
            raise InvalidPasswordError()

        return self.token_issuer(user)
