"""Document store port and in-memory implementation."""

from .memory import InMemoryDocumentStore
from .store import (
    PROJECTIONS_ROOT,
    DocumentReference,
    DocumentSnapshot,
    DocumentStore,
    projection_path,
    split_path,
)

__all__ = [
    "PROJECTIONS_ROOT",
    "DocumentReference",
    "DocumentSnapshot",
    "DocumentStore",
    "InMemoryDocumentStore",
    "projection_path",
    "split_path",
]
