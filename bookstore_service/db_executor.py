"""
Database executor: find, count, update, delete, aggregate, index and
explain calls against a books collection.

Arguments are forwarded unchanged to pymongo; errors propagate to the
caller.
"""

from typing import Any, Dict, List, Optional

from pymongo.collection import Collection
from pymongo.results import DeleteResult, UpdateResult

from bookstore_service.config import PAGE_SIZE
from bookstore_service.logger import logger
from bookstore_service.query_catalog import (
    SortSpec,
    TITLE_ASC,
    price_update,
    title_filter,
)

# ---------------------- READS ----------------------


def find_books(
    collection: Collection,
    mongo_filter: Optional[Dict[str, Any]] = None,
    projection: Optional[Dict[str, Any]] = None,
    sort: Optional[SortSpec] = None,
    skip: int = 0,
    limit: int = 0,
) -> List[Dict[str, Any]]:
    """Run a find and materialise the cursor.

    ``skip``/``limit`` of 0 mean "not applied", matching pymongo.
    """
    cursor = collection.find(mongo_filter or {}, projection)

    if sort:
        cursor = cursor.sort(sort)
    if skip:
        cursor = cursor.skip(skip)
    if limit:
        cursor = cursor.limit(limit)

    return list(cursor)


def find_page(
    collection: Collection,
    page: int,
    page_size: int = PAGE_SIZE,
    sort: SortSpec = TITLE_ASC,
    mongo_filter: Optional[Dict[str, Any]] = None,
) -> List[Dict[str, Any]]:
    """Return one 1-based page of books in a stable sort order."""
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")

    cursor = (
        collection.find(mongo_filter or {})
        .sort(sort)
        .skip((page - 1) * page_size)
        .limit(page_size)
    )
    return list(cursor)


def count_books(collection: Collection, mongo_filter: Optional[Dict[str, Any]] = None) -> int:
    return collection.count_documents(mongo_filter or {})


def run_aggregation(collection: Collection, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return list(collection.aggregate(pipeline))


# ---------------------- WRITES ----------------------


def update_book_price(collection: Collection, title: str, price: float) -> UpdateResult:
    result = collection.update_one(title_filter(title), price_update(price))
    logger.debug(
        "update_one title=%r matched=%d modified=%d",
        title, result.matched_count, result.modified_count,
    )
    return result


def delete_book_by_title(collection: Collection, title: str) -> DeleteResult:
    result = collection.delete_one(title_filter(title))
    logger.debug("delete_one title=%r deleted=%d", title, result.deleted_count)
    return result


# ---------------------- INDEXES ----------------------


def create_index(collection: Collection, keys: SortSpec) -> str:
    name = collection.create_index(keys)
    logger.debug("Created index %s on %s", name, collection.name)
    return name


def list_indexes(collection: Collection) -> List[Dict[str, Any]]:
    """Return index specs as plain dicts (``v``, ``key``, ``name``, ...)."""
    return [dict(index) for index in collection.list_indexes()]


def explain_find(
    collection: Collection,
    mongo_filter: Dict[str, Any],
    verbosity: str = "executionStats",
) -> Dict[str, Any]:
    """Explain a find with an explicit verbosity.

    ``Cursor.explain()`` does not take a verbosity, so the ``explain``
    command is issued directly.
    """
    command = {
        "explain": {"find": collection.name, "filter": mongo_filter},
        "verbosity": verbosity,
    }
    return collection.database.command(command)
