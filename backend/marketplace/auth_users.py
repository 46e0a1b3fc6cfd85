"""
Name: User Authentication (JWT)

Responsibilities:
  - Hash and verify passwords using Argon2
  - Issue and verify signed session tokens (JWT, HMAC family)
  - Provide the FastAPI dependency guarding protected routes

Collaborators:
  - config.py: JWT secret and TTL
  - error_responses.py: 401 responses
  - domain.entities: User, Identity

Notes:
  - Token claims: {"user": {"username", "id"}, "iat", "exp"}
  - Every gate failure is a 401; the detail names the failed step
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable
from uuid import UUID

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import VerificationError, VerifyMismatchError
from fastapi import Header, Request

from .config import get_settings
from .domain.entities import Identity, User
from .error_responses import unauthorized
from .exceptions import InvalidTokenError
from .logger import logger

JWT_ALGORITHM = "HS256"
# R: Only keyed-hash algorithms are accepted on decode
JWT_ACCEPTED_ALGORITHMS = ["HS256", "HS384", "HS512"]

USER_KEY = "user"
USER_ID_KEY = "id"
USERNAME_KEY = "username"

REPORT_MISSING_AUTHORIZATION_HEADER = "no authorization header in request"
REPORT_PARSING_ERROR = "failed to parse bearer token"
REPORT_MISSING_USER_KEY = "missing user key"
REPORT_INVALID_USER_DATA = "invalid user data"
REPORT_MISSING_USER_ID_KEY = "no appropriate ID key found in bearer token"
REPORT_UNEXPECTED_STRING_ERROR = "unexpected format of userID"
REPORT_INVALID_USER_ID_KEY = "userID should be a UUID"

_password_hasher = PasswordHasher()


@dataclass(frozen=True)
class AuthSettings:
    jwt_secret: str
    jwt_ttl_seconds: int


def get_auth_settings() -> AuthSettings:
    settings = get_settings()
    return AuthSettings(
        jwt_secret=settings.jwt_secret,
        jwt_ttl_seconds=settings.jwt_ttl_seconds,
    )


def hash_password(password: str) -> str:
    """R: Hash a password using Argon2."""
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """R: Verify password against stored hash."""
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError):
        return False


def create_access_token(user: User, settings: AuthSettings | None = None) -> str:
    """R: Create a signed session token for user."""
    auth_settings = settings or get_auth_settings()
    now = datetime.now(timezone.utc)
    payload = {
        USER_KEY: {
            USERNAME_KEY: user.username,
            USER_ID_KEY: str(user.id),
        },
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=auth_settings.jwt_ttl_seconds)).timestamp()),
    }
    return jwt.encode(payload, auth_settings.jwt_secret, algorithm=JWT_ALGORITHM)


def decode_access_token(
    token: str, settings: AuthSettings | None = None
) -> dict[str, Any]:
    """
    R: Verify signature, algorithm and expiry; return the raw claims.

    Raises:
        InvalidTokenError: On any structural, signature or expiry failure
    """
    auth_settings = settings or get_auth_settings()
    try:
        return jwt.decode(
            token,
            auth_settings.jwt_secret,
            algorithms=JWT_ACCEPTED_ALGORITHMS,
            options={"require": ["exp"]},
        )
    except jwt.InvalidTokenError as exc:
        raise InvalidTokenError("Invalid token.", original_error=exc) from exc


def identity_from_claims(claims: dict[str, Any]) -> Identity:
    """
    R: Extract the nested user identity from verified claims.

    Raises:
        AppHTTPException: 401 naming the first structural check that failed
    """
    if USER_KEY not in claims:
        raise unauthorized(REPORT_MISSING_USER_KEY)

    user_claim = claims[USER_KEY]
    if not isinstance(user_claim, dict):
        raise unauthorized(REPORT_INVALID_USER_DATA)

    if USER_ID_KEY not in user_claim:
        raise unauthorized(REPORT_MISSING_USER_ID_KEY)

    raw_user_id = user_claim[USER_ID_KEY]
    if not isinstance(raw_user_id, str):
        raise unauthorized(REPORT_UNEXPECTED_STRING_ERROR)

    try:
        user_id = UUID(raw_user_id)
    except ValueError as exc:
        raise unauthorized(REPORT_INVALID_USER_ID_KEY) from exc

    username = user_claim.get(USERNAME_KEY)
    return Identity(
        user_id=user_id,
        username=username if isinstance(username, str) else "",
    )


def extract_bearer_token(authorization: str | None) -> str:
    """R: Strip the Bearer prefix; empty string when no credential is present."""
    if not authorization:
        return ""
    value = authorization.strip()
    if value.startswith("Bearer "):
        value = value[len("Bearer "):]
    return value.strip()


def authenticate_request(authorization: str | None) -> Identity:
    """
    R: Run the full gate on an Authorization header value.

    Raises:
        AppHTTPException: 401 on any failure
    """
    token = extract_bearer_token(authorization)
    if not token:
        raise unauthorized(REPORT_MISSING_AUTHORIZATION_HEADER)

    try:
        claims = decode_access_token(token)
    except InvalidTokenError as exc:
        logger.info(
            "Bearer token rejected",
            extra={"reason": str(exc.original_error or exc.message)},
        )
        raise unauthorized(REPORT_PARSING_ERROR) from exc

    return identity_from_claims(claims)


def require_identity() -> Callable:
    """R: FastAPI dependency that requires a valid session token."""

    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
    ) -> Identity:
        identity = authenticate_request(authorization)
        request.state.identity = identity
        return identity

    return dependency
