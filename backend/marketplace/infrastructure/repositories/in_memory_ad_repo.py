"""
Name: In-Memory Ad Repository

Responsibilities:
  - Store ads in memory (tests/local dev)
  - Apply the same price filter, ordering and paging as the MongoDB repository

Constraints / Notes:
  - Thread-safe access (Lock)
  - Ordering aligned with MongoAdRepository: sort field, then created_at,
    then insertion order
"""

from __future__ import annotations

from threading import Lock
from typing import List

from ...domain.entities import SORT_BY_PRICE, Ad, ListOptions


class InMemoryAdRepository:
    """R: Thread-safe in-memory ad repository."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._ads: List[Ad] = []

    def save(self, ad: Ad) -> None:
        with self._lock:
            self._ads.append(ad)

    def find_all(self, options: ListOptions) -> List[Ad]:
        with self._lock:
            ads = list(enumerate(self._ads))

        if options.min_price > 0:
            ads = [(i, ad) for i, ad in ads if ad.price >= options.min_price]
        if options.max_price > 0:
            ads = [(i, ad) for i, ad in ads if ad.price <= options.max_price]

        def sort_key(item):
            index, ad = item
            primary = ad.price if options.sort_field == SORT_BY_PRICE else ad.created_at.timestamp()
            return (primary, ad.created_at.timestamp(), index)

        ads.sort(key=sort_key, reverse=not options.ascending)

        start = max(options.skip, 0)
        return [ad for _, ad in ads[start:start + options.limit]]

    def ping(self) -> bool:
        return True
