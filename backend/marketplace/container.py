"""
Name: Dependency Injection Container

Responsibilities:
  - Wire repositories, services and use cases
  - Provide factory functions used with FastAPI Depends()

Collaborators:
  - infrastructure.repositories: PostgreSQL/MongoDB/in-memory repositories
  - infrastructure.services: HttpImageInspector
  - application.use_cases

Constraints:
  - Manual DI, singletons via functools.lru_cache
  - APP_ENV=test swaps both stores for in-memory repositories

Notes:
  - This is the composition root
  - Tests override these factories through app.dependency_overrides
"""

from functools import lru_cache

from .auth_users import create_access_token, hash_password, verify_password
from .config import get_settings
from .domain.repositories import AdRepository, UserRepository
from .domain.services import ImageInspector
from .infrastructure.db.stores import ADS_COLLECTION, get_database
from .infrastructure.repositories import (
    InMemoryAdRepository,
    InMemoryUserRepository,
    MongoAdRepository,
    PostgresUserRepository,
)
from .infrastructure.services import HttpImageInspector
from .application.use_cases import (
    GetUserUseCase,
    ListAdsUseCase,
    LoginUserUseCase,
    PublishAdUseCase,
    RegisterUserUseCase,
)


@lru_cache
def get_user_repository() -> UserRepository:
    """R: Singleton user repository (PostgreSQL unless testing)."""
    if get_settings().is_test():
        return InMemoryUserRepository()
    return PostgresUserRepository()


@lru_cache
def get_ad_repository() -> AdRepository:
    """R: Singleton ad repository (MongoDB unless testing)."""
    if get_settings().is_test():
        return InMemoryAdRepository()
    return MongoAdRepository(get_database()[ADS_COLLECTION])


@lru_cache
def get_image_inspector() -> ImageInspector:
    """R: Singleton image inspector configured from settings."""
    settings = get_settings()
    return HttpImageInspector(
        timeout_s=settings.image_fetch_timeout_seconds,
        max_bytes=settings.max_image_bytes,
    )


def get_register_user_use_case() -> RegisterUserUseCase:
    return RegisterUserUseCase(
        repository=get_user_repository(),
        password_hasher=hash_password,
        token_issuer=create_access_token,
    )


def get_login_user_use_case() -> LoginUserUseCase:
    return LoginUserUseCase(
        repository=get_user_repository(),
        password_verifier=verify_password,
        token_issuer=create_access_token,
    )


def get_get_user_use_case() -> GetUserUseCase:
    return GetUserUseCase(repository=get_user_repository())


def get_publish_ad_use_case() -> PublishAdUseCase:
    return PublishAdUseCase(
        repository=get_ad_repository(),
        get_user=get_get_user_use_case(),
        image_inspector=get_image_inspector(),
    )


def get_list_ads_use_case() -> ListAdsUseCase:
    return ListAdsUseCase(repository=get_ad_repository())
