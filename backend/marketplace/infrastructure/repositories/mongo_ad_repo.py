"""
Name: MongoDB Ad Repository

Responsibilities:
  - Insert ads into the ads collection
  - Translate ListOptions into a price filter, sort and skip/limit
  - Map documents back into Ad entities

Collaborators:
  - pymongo Collection (infrastructure.db.stores)
  - domain.repositories.AdRepository

Notes:
  - A price bound of 0 is "no bound" and adds no condition
  - created_at breaks ties when sorting by price
  - IDs are stored as UUID strings
"""

from datetime import timezone
from typing import Any, Dict, List, Tuple
from uuid import UUID

import pymongo
from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from ...domain.entities import SORT_BY_CREATED_AT, SORT_BY_PRICE, Ad, Author, ListOptions
from ...exceptions import PersistenceError
from ...logger import logger

SAVE_TIMEOUT_SECONDS = 5
FIND_TIMEOUT_SECONDS = 10


def build_price_filter(options: ListOptions) -> Dict[str, Any]:
    """R: Mongo filter for the non-zero price bounds."""
    price_filter: Dict[str, Any] = {}
    if options.min_price > 0:
        price_filter["$gte"] = options.min_price
    if options.max_price > 0:
        price_filter["$lte"] = options.max_price
    if not price_filter:
        return {}
    return {SORT_BY_PRICE: price_filter}


def build_sort(options: ListOptions) -> List[Tuple[str, int]]:
    """R: Sort keys; ascending only for order_by == 1."""
    direction = ASCENDING if options.ascending else DESCENDING
    sort = [(options.sort_field, direction)]
    if options.sort_field != SORT_BY_CREATED_AT:
        sort.append((SORT_BY_CREATED_AT, direction))
    return sort


def _ad_to_document(ad: Ad) -> Dict[str, Any]:
    return {
        "_id": str(ad.id),
        "title": ad.title,
        "text": ad.text,
        "image_url": ad.image_url,
        "price": ad.price,
        "author": {"_id": str(ad.author.id), "username": ad.author.username},
        "created_at": ad.created_at,
    }


def _document_to_ad(doc: Dict[str, Any]) -> Ad:
    created_at = doc["created_at"]
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    author = doc.get("author") or {}
    return Ad(
        id=UUID(str(doc["_id"])),
        title=doc.get("title", ""),
        text=doc.get("text", ""),
        image_url=doc.get("image_url", ""),
        price=float(doc.get("price", 0)),
        author=Author(id=UUID(str(author["_id"])), username=author.get("username", "")),
        created_at=created_at,
    )


class MongoAdRepository:
    """R: AdRepository backed by a MongoDB collection."""

    def __init__(self, collection: Collection):
        self.collection = collection

    def save(self, ad: Ad) -> None:
        """R: Insert one ad document."""
        try:
            with pymongo.timeout(SAVE_TIMEOUT_SECONDS):
                self.collection.insert_one(_ad_to_document(ad))
        except PyMongoError as e:
            logger.error(f"MongoAdRepository: Save failed: {e}")
            raise PersistenceError("failed to save ad", original_error=e) from e

    def find_all(self, options: ListOptions) -> List[Ad]:
        """R: One page of ads; an empty list when nothing matches."""
        try:
            with pymongo.timeout(FIND_TIMEOUT_SECONDS):
                cursor = (
                    self.collection.find(build_price_filter(options))
                    .sort(build_sort(options))
                    .skip(options.skip)
                    .limit(options.limit)
                )
                documents = list(cursor)
        except PyMongoError as e:
            logger.error(f"MongoAdRepository: Find failed: {e}")
            raise PersistenceError(f"Ad listing failed: {e}", original_error=e) from e

        return [_document_to_ad(doc) for doc in documents]

    def ping(self) -> bool:
        """R: Ping the database behind the collection."""
        self.collection.database.command("ping")
        return True
