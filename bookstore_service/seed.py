"""
Seed the ``books`` collection with a small sample catalogue so every task
in the runner has data to work on.

Usage:
    bookstore-seed
    python -m bookstore_service.seed
"""

import copy
import sys
from typing import Any, Dict, List

from pymongo.collection import Collection

from bookstore_service.cluster_manager import connect_to_cluster, get_books_collection
from bookstore_service.config import COLLECTION_NAME, DB_NAME, MONGODB_URI
from bookstore_service.logger import logger

SAMPLE_BOOKS: List[Dict[str, Any]] = [
    {
        "title": "Clean Code",
        "author": "Robert C. Martin",
        "genre": "Programming",
        "published_year": 2008,
        "price": 44.99,
        "in_stock": True,
        "pages": 464,
        "publisher": "Prentice Hall",
    },
    {
        "title": "Refactoring",
        "author": "Martin Fowler",
        "genre": "Programming",
        "published_year": 2018,
        "price": 47.99,
        "in_stock": True,
        "pages": 448,
        "publisher": "Addison-Wesley",
    },
    {
        "title": "NoSQL Distilled",
        "author": "Martin Fowler",
        "genre": "Databases",
        "published_year": 2012,
        "price": 34.99,
        "in_stock": False,
        "pages": 192,
        "publisher": "Addison-Wesley",
    },
    {
        "title": "Designing Data-Intensive Applications",
        "author": "Martin Kleppmann",
        "genre": "Databases",
        "published_year": 2017,
        "price": 52.5,
        "in_stock": True,
        "pages": 616,
        "publisher": "O'Reilly Media",
    },
    {
        "title": "The Pragmatic Programmer",
        "author": "Andrew Hunt",
        "genre": "Programming",
        "published_year": 1999,
        "price": 39.95,
        "in_stock": True,
        "pages": 352,
        "publisher": "Addison-Wesley",
    },
    {
        "title": "Design Patterns",
        "author": "Erich Gamma",
        "genre": "Software Design",
        "published_year": 1994,
        "price": 54.99,
        "in_stock": False,
        "pages": 395,
        "publisher": "Addison-Wesley",
    },
    {
        "title": "Domain-Driven Design",
        "author": "Eric Evans",
        "genre": "Software Design",
        "published_year": 2003,
        "price": 59.99,
        "in_stock": True,
        "pages": 560,
        "publisher": "Addison-Wesley",
    },
    {
        "title": "Clean Architecture",
        "author": "Robert C. Martin",
        "genre": "Software Design",
        "published_year": 2017,
        "price": 36.5,
        "in_stock": True,
        "pages": 432,
        "publisher": "Prentice Hall",
    },
    {
        "title": "Fluent Python",
        "author": "Luciano Ramalho",
        "genre": "Programming",
        "published_year": 2015,
        "price": 49.5,
        "in_stock": True,
        "pages": 792,
        "publisher": "O'Reilly Media",
    },
    {
        "title": "MongoDB: The Definitive Guide",
        "author": "Kristina Chodorow",
        "genre": "Databases",
        "published_year": 2010,
        "price": 29.99,
        "in_stock": False,
        "pages": 216,
        "publisher": "O'Reilly Media",
    },
    {
        "title": "Site Reliability Engineering",
        "author": "Betsy Beyer",
        "genre": "Operations",
        "published_year": 2016,
        "price": 41.0,
        "in_stock": True,
        "pages": 552,
        "publisher": "O'Reilly Media",
    },
    {
        "title": "The Mythical Man-Month",
        "author": "Frederick P. Brooks Jr.",
        "genre": "Software Engineering",
        "published_year": 1975,
        "price": 27.5,
        "in_stock": True,
        "pages": 322,
        "publisher": "Addison-Wesley",
    },
]


def seed_books(
    collection: Collection,
    books: List[Dict[str, Any]] = SAMPLE_BOOKS,
    drop: bool = True,
) -> int:
    """Insert *books* into *collection*, clearing it first when *drop* is set.

    Copies are inserted so pymongo's ``_id`` assignment never leaks back
    into ``SAMPLE_BOOKS``.
    """
    if not books:
        return 0

    if drop:
        removed = collection.delete_many({}).deleted_count
        logger.info("Cleared %d existing books", removed)

    result = collection.insert_many(copy.deepcopy(books))
    return len(result.inserted_ids)


def main() -> int:
    client = None
    try:
        client = connect_to_cluster(MONGODB_URI)
        inserted = seed_books(get_books_collection(client))
        logger.info("Inserted %d books into %s.%s", inserted, DB_NAME, COLLECTION_NAME)
        return 0
    except Exception as e:
        logger.error("Seeding failed: %s", e)
        return 1
    finally:
        if client is not None:
            client.close()


if __name__ == "__main__":
    sys.exit(main())
