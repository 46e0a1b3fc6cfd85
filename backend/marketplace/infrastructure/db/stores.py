"""
Name: Store Connections (PostgreSQL users, MongoDB ads)

Responsibilities:
  - Open both stores at startup and close them at shutdown
  - Hand out the users pool and the marketplace database
  - Ensure the indexes used by ad listing exist

Collaborators:
  - psycopg_pool: PostgreSQL connection pooling
  - pymongo: MongoDB client (thread-safe, pooled internally)
  - config: storage URLs, pool sizes, statement timeout

Constraints:
  - One set of connections per process
  - A failure while opening leaves nothing open
"""

from dataclasses import dataclass
import threading
from typing import Optional

from psycopg_pool import ConnectionPool
from pymongo import ASCENDING, MongoClient
from pymongo.database import Database

from ...logger import logger

ADS_COLLECTION = "ads"


@dataclass
class _Stores:
    pool: ConnectionPool
    mongo: MongoClient
    database: Database


_stores: Optional[_Stores] = None
_stores_lock = threading.Lock()


def _statement_timeout_configurer(timeout_ms: int):
    def configure(conn) -> None:
        if timeout_ms > 0:
            conn.execute(f"SET statement_timeout = {int(timeout_ms)}")
            conn.commit()

    return configure


def _open_mongo(mongo_url: str, db_name: str) -> tuple[MongoClient, Database]:
    client = MongoClient(mongo_url, uuidRepresentation="standard", tz_aware=True)
    try:
        database = client[db_name]
        ads = database[ADS_COLLECTION]
        ads.create_index([("created_at", ASCENDING)])
        ads.create_index([("price", ASCENDING)])
    except Exception:
        client.close()
        raise
    return client, database


def open_stores(settings) -> None:
    """
    R: Open the PostgreSQL pool and the MongoDB client.

    Raises:
        RuntimeError: If the stores are already open
        Exception: Driver errors; anything opened so far is closed first
    """
    global _stores

    with _stores_lock:
        if _stores is not None:
            raise RuntimeError("Stores already open")

        pool = ConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            configure=_statement_timeout_configurer(settings.db_statement_timeout_ms),
            open=True,
        )
        try:
            client, database = _open_mongo(settings.mongo_url, settings.mongo_db)
        except Exception:
            logger.error("MongoDB unavailable at startup; closing PostgreSQL pool")
            pool.close()
            raise

        _stores = _Stores(pool=pool, mongo=client, database=database)
        logger.info(
            "Stores opened",
            extra={
                "pool_min_size": settings.db_pool_min_size,
                "pool_max_size": settings.db_pool_max_size,
                "mongo_db": settings.mongo_db,
            },
        )


def _require_stores() -> _Stores:
    if _stores is None:
        raise RuntimeError("Stores not open. Call open_stores() first.")
    return _stores


def get_pool() -> ConnectionPool:
    """R: PostgreSQL pool for the users table."""
    return _require_stores().pool


def get_database() -> Database:
    """R: MongoDB database holding the ads collection."""
    return _require_stores().database


def close_stores() -> None:
    """R: Close both stores. Safe to call when nothing is open."""
    global _stores

    with _stores_lock:
        if _stores is None:
            return
        logger.info("Closing stores")
        try:
            _stores.mongo.close()
        finally:
            _stores.pool.close()
            _stores = None
