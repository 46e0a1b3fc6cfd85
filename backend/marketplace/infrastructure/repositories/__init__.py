"""Infrastructure repositories"""

from .in_memory_ad_repo import InMemoryAdRepository
from .in_memory_user_repo import InMemoryUserRepository
from .mongo_ad_repo import MongoAdRepository
from .postgres_user_repo import PostgresUserRepository

__all__ = [
    "InMemoryAdRepository",
    "InMemoryUserRepository",
    "MongoAdRepository",
    "PostgresUserRepository",
]
