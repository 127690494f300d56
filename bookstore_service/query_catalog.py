"""
Query catalog: the literal filter, update, projection, sort and pipeline
documents issued against the ``books`` collection.

Each builder returns a fresh document so callers may mutate the result
without affecting later calls.
"""

from typing import Any, Dict, List, Tuple

from pymongo import ASCENDING, DESCENDING

SortSpec = List[Tuple[str, int]]

# ---------------------- FILTERS ----------------------


def genre_filter(genre: str) -> Dict[str, Any]:
    return {"genre": genre}


def published_after_filter(year: int) -> Dict[str, Any]:
    return {"published_year": {"$gt": year}}


def author_filter(author: str) -> Dict[str, Any]:
    return {"author": author}


def title_filter(title: str) -> Dict[str, Any]:
    return {"title": title}


def in_stock_published_after_filter(year: int) -> Dict[str, Any]:
    return {"in_stock": True, "published_year": {"$gt": year}}


# ---------------------- UPDATES ----------------------


def price_update(price: float) -> Dict[str, Any]:
    return {"$set": {"price": price}}


# ---------------------- PROJECTIONS & SORTS ----------------------

TITLE_AUTHOR_PRICE_PROJECTION = {"_id": 0, "title": 1, "author": 1, "price": 1}

PRICE_ASC: SortSpec = [("price", ASCENDING)]
PRICE_DESC: SortSpec = [("price", DESCENDING)]
TITLE_ASC: SortSpec = [("title", ASCENDING)]

# ---------------------- AGGREGATION PIPELINES ----------------------


def average_price_by_genre_pipeline() -> List[Dict[str, Any]]:
    """Average price and book count per genre, most expensive genre first."""
    return [
        {
            "$group": {
                "_id": "$genre",
                "avgPrice": {"$avg": "$price"},
                "count": {"$sum": 1},
            }
        },
        {"$sort": {"avgPrice": -1}},
    ]


def top_authors_pipeline(limit: int = 1) -> List[Dict[str, Any]]:
    """Authors ranked by number of books; ``limit=1`` gives the top author."""
    return [
        {"$group": {"_id": "$author", "totalBooks": {"$sum": 1}}},
        {"$sort": {"totalBooks": -1}},
        {"$limit": limit},
    ]


def books_by_decade_pipeline() -> List[Dict[str, Any]]:
    """Bucket books into decades labelled like ``"2000s"``.

    The decade is ``floor(published_year / 10) * 10`` rendered as a string
    with an ``s`` suffix.
    """
    decade_expr = {
        "$concat": [
            {
                "$toString": {
                    "$multiply": [
                        {"$floor": {"$divide": ["$published_year", 10]}},
                        10,
                    ]
                }
            },
            "s",
        ]
    }
    return [
        {"$project": {"decade": decade_expr}},
        {"$group": {"_id": "$decade", "count": {"$sum": 1}}},
        {"$sort": {"_id": 1}},
    ]


# ---------------------- INDEXES ----------------------

TITLE_INDEX: SortSpec = [("title", ASCENDING)]
AUTHOR_YEAR_INDEX: SortSpec = [("author", ASCENDING), ("published_year", DESCENDING)]
