"""Domain layer: entities and repository/service contracts."""

from .entities import Ad, Author, Identity, ListOptions, User
from .repositories import AdRepository, UserRepository
from .services import ImageInspector

__all__ = [
    "Ad",
    "Author",
    "Identity",
    "ListOptions",
    "User",
    "AdRepository",
    "UserRepository",
    "ImageInspector",
]
