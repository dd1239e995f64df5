"""MongoDB integration for ledgerline.

Provides a MongoDB-backed document store for projection documents using
PyMongo's native asyncio API.

Installation:
    pip install ledgerline[mongodb]

Usage:
    >>> from ledgerline.integrations.mongodb import (
    ...     MongoConfiguration,
    ...     MongoDocumentStore,
    ... )
    >>>
    >>> config = MongoConfiguration(database="shop")
    >>> store = wire_inline_projections(
    ...     event_store, MongoDocumentStore(config), [cart_summary]
    ... )
"""

from .config import MongoConfiguration
from .document_store import MongoDocumentStore

__all__ = [
    "MongoConfiguration",
    "MongoDocumentStore",
]
