"""Bookstore query runner: fixed CRUD, query, aggregation and index tasks
against the ``plp_bookstore.books`` MongoDB collection."""

__version__ = "1.0.0"
