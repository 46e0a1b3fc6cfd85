"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure the test environment (APP_ENV=test, no .env file)
  - Provide in-memory repositories and a fake image inspector
  - Provide user and ad factories

Collaborators:
  - pytest: Test framework
  - unittest.mock: Mocking library
  - marketplace.domain: entities
  - marketplace.infrastructure.repositories: in-memory repositories

Notes:
  - Fixtures are function scoped; every test starts with empty stores
"""

import os
import struct
import sys
import zlib
from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import Mock
from uuid import uuid4

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ.setdefault("APP_ENV", "test")

from marketplace import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from marketplace.domain.entities import Ad, Author, User  # noqa: E402
from marketplace.infrastructure.repositories import (  # noqa: E402
    InMemoryAdRepository,
    InMemoryUserRepository,
)

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Clear settings cache around each test."""
    app_config.get_settings.cache_clear()
    yield
    app_config.get_settings.cache_clear()


@pytest.fixture
def auth_settings() -> SimpleNamespace:
    return SimpleNamespace(jwt_secret="test-secret", jwt_ttl_seconds=3600)


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def ad_repository() -> InMemoryAdRepository:
    return InMemoryAdRepository()


@pytest.fixture
def image_inspector() -> Mock:
    """R: Image inspector that accepts every URL."""
    inspector = Mock()
    inspector.inspect.return_value = None
    return inspector


@pytest.fixture
def sample_user() -> User:
    return User(id=uuid4(), username="alice", password_hash="hash")


@pytest.fixture
def make_ad():
    """R: Factory building ads created `minutes` after a fixed base time."""

    def _make(
        *,
        price: float = 100.0,
        minutes: int = 0,
        author: Author | None = None,
        title: str = "Bike for sale",
    ) -> Ad:
        return Ad(
            id=uuid4(),
            title=title,
            text="A perfectly good bike, barely used.",
            image_url="https://example.com/bike.png",
            price=price,
            author=author or Author(id=uuid4(), username="seller"),
            created_at=BASE_TIME + timedelta(minutes=minutes),
        )

    return _make


@pytest.fixture
def oversized_png() -> bytes:
    """R: Header-only PNG declaring 100000 x 100000 pixels."""

    def chunk(kind: bytes, data: bytes) -> bytes:
        return (
            struct.pack(">I", len(data))
            + kind
            + data
            + struct.pack(">I", zlib.crc32(kind + data) & 0xFFFFFFFF)
        )

    ihdr = struct.pack(">IIBBBBB", 100_000, 100_000, 8, 2, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", ihdr) + chunk(b"IDAT", b"") + chunk(b"IEND", b"")
