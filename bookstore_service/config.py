import os
from dotenv import load_dotenv

load_dotenv()

# Use environment variable first, then the local default
FALLBACK_URI = "mongodb://127.0.0.1:27017"
MONGODB_URI = os.getenv("MONGODB_URI") or FALLBACK_URI

DB_NAME = "plp_bookstore"
COLLECTION_NAME = "books"

SERVER_SELECTION_TIMEOUT_MS = int(os.getenv("SERVER_SELECTION_TIMEOUT_MS", "10000"))

# ---- Pagination ----
PAGE_SIZE = 5
API_MAX_PAGE_SIZE = 100
API_MAX_PAGE = 100_000

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
