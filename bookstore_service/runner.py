"""
Bookstore task runner: connect, run the fixed CRUD / query / aggregation /
index sequence against ``plp_bookstore.books`` and print every result.

Usage:
    bookstore-queries
    python -m bookstore_service.runner

Set MONGODB_URI to point at Atlas or another deployment; the local
default is mongodb://127.0.0.1:27017.
"""

import sys
from typing import Any, Callable, List, NamedTuple, Optional

from pymongo.collection import Collection

from bookstore_service import db_executor as ex
from bookstore_service import query_catalog as qc
from bookstore_service.cluster_manager import connect_to_cluster, get_books_collection
from bookstore_service.config import MONGODB_URI, PAGE_SIZE
from bookstore_service.logger import logger
from bookstore_service.response_formatter import format_section


class Step(NamedTuple):
    title: str
    action: Callable[[Collection], Any]


# ---------------------- COMPOSITE STEPS ----------------------


def _update_clean_code_price(collection: Collection) -> Any:
    ex.update_book_price(collection, "Clean Code", 49.99)
    return ex.find_books(collection, qc.title_filter("Clean Code"))


def _delete_nosql_distilled(collection: Collection) -> str:
    ex.delete_book_by_title(collection, "NoSQL Distilled")
    return f"Remaining count: {ex.count_books(collection)}"


# ---------------------- STEP SEQUENCE ----------------------


def build_steps(page_size: int = PAGE_SIZE) -> List[Step]:
    """Return the task sequence in execution order."""
    return [
        # Basic CRUD
        Step(
            "Find all Programming books",
            lambda c: ex.find_books(c, qc.genre_filter("Programming")),
        ),
        Step(
            "Books published after 2010",
            lambda c: ex.find_books(c, qc.published_after_filter(2010)),
        ),
        Step(
            "Books by Martin Fowler",
            lambda c: ex.find_books(c, qc.author_filter("Martin Fowler")),
        ),
        Step("Update price of 'Clean Code' to 49.99", _update_clean_code_price),
        Step("Delete book titled 'NoSQL Distilled'", _delete_nosql_distilled),
        # Advanced queries
        Step(
            "In-stock books published after 2010",
            lambda c: ex.find_books(c, qc.in_stock_published_after_filter(2010)),
        ),
        Step(
            "Projection: title, author, price",
            lambda c: ex.find_books(c, projection=qc.TITLE_AUTHOR_PRICE_PROJECTION),
        ),
        Step("Sort by price ascending", lambda c: ex.find_books(c, sort=qc.PRICE_ASC)),
        Step("Sort by price descending", lambda c: ex.find_books(c, sort=qc.PRICE_DESC)),
        Step(
            f"Page 1 (first {page_size} books)",
            lambda c: ex.find_page(c, 1, page_size),
        ),
        Step(
            f"Page 2 (next {page_size} books)",
            lambda c: ex.find_page(c, 2, page_size),
        ),
        # Aggregation
        Step(
            "Average price by genre",
            lambda c: ex.run_aggregation(c, qc.average_price_by_genre_pipeline()),
        ),
        Step(
            "Author with the most books",
            lambda c: ex.run_aggregation(c, qc.top_authors_pipeline(limit=1)),
        ),
        Step(
            "Books by decade",
            lambda c: ex.run_aggregation(c, qc.books_by_decade_pipeline()),
        ),
        # Indexing
        Step("Create index on title", lambda c: ex.create_index(c, qc.TITLE_INDEX)),
        Step(
            "Create compound index on author + published_year",
            lambda c: ex.create_index(c, qc.AUTHOR_YEAR_INDEX),
        ),
        Step(
            "Explain() example for query by title",
            lambda c: ex.explain_find(c, qc.title_filter("Clean Code")),
        ),
        Step("Current indexes", ex.list_indexes),
    ]


def run_steps(
    collection: Collection,
    steps: List[Step],
    emit: Callable[[str], Any] = print,
) -> None:
    """Run *steps* in order; the first failure propagates."""
    for step in steps:
        emit(format_section(step.title, step.action(collection)))


def run(
    mongo_uri: str = MONGODB_URI,
    emit: Callable[[str], Any] = print,
    steps: Optional[List[Step]] = None,
) -> bool:
    """Connect, run the sequence, always disconnect. Returns success."""
    client = None
    try:
        client = connect_to_cluster(mongo_uri)
        logger.info("Connected to MongoDB")

        collection = get_books_collection(client)
        run_steps(collection, build_steps() if steps is None else steps, emit)

        logger.info("All tasks completed.")
        return True
    except Exception as e:
        logger.error("Error: %s", e)
        logger.debug("Task sequence aborted", exc_info=True)
        return False
    finally:
        if client is not None:
            client.close()
        logger.info("Disconnected.")


def main() -> int:
    return 0 if run() else 1


if __name__ == "__main__":
    sys.exit(main())
