from typing import Any, Dict, List

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from bookstore_service.config import (
    COLLECTION_NAME,
    DB_NAME,
    MONGODB_URI,
    SERVER_SELECTION_TIMEOUT_MS,
)


class ClusterConnectionError(ConnectionError):
    """Raised when the MongoDB deployment cannot be reached."""


def connect_to_cluster(
    mongo_uri: str = MONGODB_URI,
    timeout_ms: int = SERVER_SELECTION_TIMEOUT_MS,
) -> MongoClient:
    """Create a MongoClient and force a round trip so failures surface here."""
    client = MongoClient(mongo_uri, serverSelectionTimeoutMS=timeout_ms)
    try:
        client.admin.command("ping")
    except ServerSelectionTimeoutError as e:
        client.close()
        raise ClusterConnectionError(
            "Connection timed out. Check your MongoDB URI and network."
        ) from e
    except ConnectionFailure as e:
        client.close()
        raise ClusterConnectionError("Failed to connect to MongoDB cluster") from e
    except BaseException:
        client.close()
        raise
    return client


def get_books_collection(
    client: MongoClient,
    database_name: str = DB_NAME,
    collection_name: str = COLLECTION_NAME,
) -> Collection:
    return client[database_name][collection_name]


def list_collections(client: MongoClient, database_name: str = DB_NAME) -> List[Dict[str, Any]]:
    """List collections with estimated doc counts (avoids full scans)."""
    db = client[database_name]
    return [
        {
            "name": col_name,
            "document_count": db[col_name].estimated_document_count(),
        }
        for col_name in db.list_collection_names()
    ]
