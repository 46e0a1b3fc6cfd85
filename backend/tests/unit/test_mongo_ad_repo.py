"""
Name: MongoDB Ad Repository Unit Tests

Responsibilities:
  - Verify filter and sort construction from ListOptions
  - Verify document mapping and query chaining against a mocked collection
  - Verify driver errors surface as PersistenceError
"""

from unittest.mock import MagicMock
from uuid import UUID

import pytest
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from marketplace.domain.entities import ListOptions
from marketplace.exceptions import PersistenceError
from marketplace.infrastructure.repositories.mongo_ad_repo import (
    MongoAdRepository,
    build_price_filter,
    build_sort,
)


pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "min_price, max_price, expected",
    [
        (0, 0, {}),
        (10, 0, {"price": {"$gte": 10}}),
        (0, 20, {"price": {"$lte": 20}}),
        (10, 20, {"price": {"$gte": 10, "$lte": 20}}),
    ],
)
def test_build_price_filter(min_price, max_price, expected):
    options = ListOptions(page=1, min_price=min_price, max_price=max_price)

    assert build_price_filter(options) == expected


def test_build_sort_by_created_at_descending():
    assert build_sort(ListOptions(page=1)) == [("created_at", DESCENDING)]


def test_build_sort_by_price_adds_tie_break():
    options = ListOptions(page=1, sort_by="price", order_by=1)

    assert build_sort(options) == [("price", ASCENDING), ("created_at", ASCENDING)]


def test_save_inserts_document(make_ad):
    collection = MagicMock()
    ad = make_ad(price=42.5)

    MongoAdRepository(collection).save(ad)

    document = collection.insert_one.call_args.args[0]
    assert document["_id"] == str(ad.id)
    assert document["author"] == {"_id": str(ad.author.id), "username": "seller"}
    assert document["price"] == 42.5
    assert document["created_at"] == ad.created_at


def test_save_wraps_driver_errors(make_ad):
    collection = MagicMock()
    collection.insert_one.side_effect = PyMongoError("connection refused")

    with pytest.raises(PersistenceError):
        MongoAdRepository(collection).save(make_ad())


def test_find_all_chains_query_and_maps_documents(make_ad):
    ad = make_ad(price=15)
    document = {
        "_id": str(ad.id),
        "title": ad.title,
        "text": ad.text,
        "image_url": ad.image_url,
        "price": ad.price,
        "author": {"_id": str(ad.author.id), "username": ad.author.username},
        "created_at": ad.created_at,
    }
    collection = MagicMock()
    cursor = collection.find.return_value.sort.return_value.skip.return_value
    cursor.limit.return_value = [document]

    options = ListOptions(page=3, limit=5, sort_by="price", min_price=10)
    result = MongoAdRepository(collection).find_all(options)

    collection.find.assert_called_once_with({"price": {"$gte": 10}})
    collection.find.return_value.sort.assert_called_once_with(
        [("price", DESCENDING), ("created_at", DESCENDING)]
    )
    collection.find.return_value.sort.return_value.skip.assert_called_once_with(10)
    cursor.limit.assert_called_once_with(5)
    assert result == [ad]
    assert isinstance(result[0].author.id, UUID)


def test_find_all_returns_empty_list(make_ad):
    collection = MagicMock()
    collection.find.return_value.sort.return_value.skip.return_value.limit.return_value = []

    assert MongoAdRepository(collection).find_all(ListOptions(page=1)) == []


def test_find_all_wraps_driver_errors():
    collection = MagicMock()
    collection.find.side_effect = PyMongoError("timed out")

    with pytest.raises(PersistenceError):
        MongoAdRepository(collection).find_all(ListOptions(page=1))
