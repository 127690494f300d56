"""
FastAPI read-only interface to the bookstore collection.

Exposes the same filters, projections, sorts, pagination, aggregation
reports and index inspection the task runner prints, as JSON.

Run with:
    uvicorn bookstore_service.app:app --reload
"""

from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from bookstore_service import __version__
from bookstore_service import db_executor as ex
from bookstore_service import query_catalog as qc
from bookstore_service.cluster_manager import (
    ClusterConnectionError,
    connect_to_cluster,
    get_books_collection,
    list_collections,
)
from bookstore_service.config import API_MAX_PAGE, API_MAX_PAGE_SIZE, MONGODB_URI, PAGE_SIZE
from bookstore_service.logger import logger
from bookstore_service.response_formatter import clean_documents, sanitise_value


app = FastAPI(title="Bookstore Query API", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)


# ---------------------- RESPONSE MODELS ----------------------


class BooksPage(BaseModel):
    page: int = Field(ge=1, le=API_MAX_PAGE, description="Page number (1-based)")
    page_size: int = Field(ge=1, le=API_MAX_PAGE_SIZE)
    total_results: int = Field(ge=0, description="Books matching the filter")
    result_count: int = Field(ge=0, description="Books on this page")
    data: List[Dict[str, Any]]


class SortOrder(str, Enum):
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    TITLE = "title"


_SORTS = {
    SortOrder.PRICE_ASC: qc.PRICE_ASC,
    SortOrder.PRICE_DESC: qc.PRICE_DESC,
    SortOrder.TITLE: qc.TITLE_ASC,
}


# ---------------------- DEPENDENCIES ----------------------


def get_client() -> Iterator[MongoClient]:
    """Open a client per request and close it once the response is built."""
    try:
        client = connect_to_cluster(MONGODB_URI)
    except ClusterConnectionError as e:
        logger.error("connect error: %s", e)
        raise HTTPException(status_code=503, detail=str(e))
    except PyMongoError as e:
        raise _db_error("connect", e)
    try:
        yield client
    finally:
        client.close()


def get_collection(client: MongoClient = Depends(get_client)) -> Collection:
    return get_books_collection(client)


def _db_error(endpoint: str, e: PyMongoError) -> HTTPException:
    logger.error("%s error: %s", endpoint, e)
    return HTTPException(status_code=500, detail=f"Database error: {e}")


# ---------------------- ENDPOINTS ----------------------


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/collections")
def collections(client: MongoClient = Depends(get_client)):
    """Collections of the bookstore database with estimated counts."""
    try:
        return {"collections": list_collections(client)}
    except PyMongoError as e:
        raise _db_error("collections", e)


@app.get("/books", response_model=BooksPage)
def list_books(
    genre: Optional[str] = None,
    author: Optional[str] = None,
    published_after: Optional[int] = None,
    in_stock: Optional[bool] = None,
    sort: SortOrder = SortOrder.TITLE,
    page: int = Query(
        default=1,
        ge=1,
        le=API_MAX_PAGE,
        description=f"Page number (1-based, max {API_MAX_PAGE})",
    ),
    page_size: int = Query(
        default=PAGE_SIZE,
        ge=1,
        le=API_MAX_PAGE_SIZE,
        description=f"Results per page (max {API_MAX_PAGE_SIZE})",
    ),
    collection: Collection = Depends(get_collection),
):
    """Filter, sort and paginate books."""
    mongo_filter: Dict[str, Any] = {}
    if genre is not None:
        mongo_filter.update(qc.genre_filter(genre))
    if author is not None:
        mongo_filter.update(qc.author_filter(author))
    if published_after is not None:
        mongo_filter.update(qc.published_after_filter(published_after))
    if in_stock is not None:
        mongo_filter["in_stock"] = in_stock

    try:
        total = ex.count_books(collection, mongo_filter)
        data = ex.find_page(
            collection, page, page_size, sort=_SORTS[sort], mongo_filter=mongo_filter,
        )
    except PyMongoError as e:
        raise _db_error("list-books", e)

    cleaned = clean_documents(data)
    return BooksPage(
        page=page,
        page_size=page_size,
        total_results=total,
        result_count=len(cleaned),
        data=cleaned,
    )


@app.get("/books/summary")
def books_summary(collection: Collection = Depends(get_collection)):
    """Title, author and price of every book."""
    try:
        data = ex.find_books(collection, projection=qc.TITLE_AUTHOR_PRICE_PROJECTION)
    except PyMongoError as e:
        raise _db_error("books-summary", e)
    return {"data": clean_documents(data)}


@app.get("/reports/average-price-by-genre")
def average_price_by_genre(collection: Collection = Depends(get_collection)):
    try:
        data = ex.run_aggregation(collection, qc.average_price_by_genre_pipeline())
    except PyMongoError as e:
        raise _db_error("average-price-by-genre", e)
    return {"data": clean_documents(data)}


@app.get("/reports/top-authors")
def top_authors(
    limit: int = Query(default=1, ge=1, le=API_MAX_PAGE_SIZE),
    collection: Collection = Depends(get_collection),
):
    try:
        data = ex.run_aggregation(collection, qc.top_authors_pipeline(limit=limit))
    except PyMongoError as e:
        raise _db_error("top-authors", e)
    return {"data": clean_documents(data)}


@app.get("/reports/books-by-decade")
def books_by_decade(collection: Collection = Depends(get_collection)):
    try:
        data = ex.run_aggregation(collection, qc.books_by_decade_pipeline())
    except PyMongoError as e:
        raise _db_error("books-by-decade", e)
    return {"data": clean_documents(data)}


@app.get("/indexes")
def indexes(collection: Collection = Depends(get_collection)):
    """Return index information for the collection."""
    try:
        return {"indexes": sanitise_value(ex.list_indexes(collection))}
    except PyMongoError as e:
        raise _db_error("indexes", e)


@app.get("/explain")
def explain(
    title: str = Query(..., min_length=1),
    collection: Collection = Depends(get_collection),
):
    """executionStats explain for a find by title."""
    try:
        plan = ex.explain_find(collection, qc.title_filter(title))
    except PyMongoError as e:
        raise _db_error("explain", e)
    return sanitise_value(plan)
