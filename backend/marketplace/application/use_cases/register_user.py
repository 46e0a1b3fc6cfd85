"""
Name: Register User Use Case

Responsibilities:
  - Check username and password against the field rules
  - Reject already-taken usernames
  - Hash the password and persist a new user
  - Issue a session token for the new user

Collaborators:
  - domain.repositories.UserRepository
  - auth_users.hash_password / create_access_token (injected)

Notes:
  - Lookup-then-insert; a concurrent duplicate is caught by the store's
    unique constraint and reported the same way
"""

from typing import Callable
from uuid import uuid4

from pydantic import ValidationError

from ...domain.entities import User
from ...domain.repositories import UserRepository
from ...exceptions import FieldValidationError, UserAlreadyExistsError
from ...logger import logger
from ..validation import UserCredentials, field_errors


class RegisterUserUseCase:
    """R: Create a user account and return its session token."""

    def __init__(
        self,
        repository: UserRepository,
        password_hasher: Callable[[str], str],
        token_issuer: Callable[[User], str],
    ):
        self.repository = repository
        self.password_hasher = password_hasher
        self.token_issuer = token_issuer

    def execute(self, *, username: str, password: str) -> str:
        try:
            UserCredentials.model_validate({"username": username, "password": password})
        except ValidationError as exc:
            raise FieldValidationError(field_errors(exc)) from exc

        if self.repository.get_by_username(username) is not None:
            raise UserAlreadyExistsError()

        user = User(
            id=uuid4(),
            username=username,
            password_hash=self.password_hasher(password),
        )
        self.repository.save(user)

        logger.info("User registered", extra={"user_id": str(user.id)})
        return self.token_issuer(user)
