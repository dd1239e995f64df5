"""Central test fixtures."""

import pytest

from ledgerline import (
    InMemoryDocumentStore,
    InMemoryEventStore,
    ReadRetryPolicy,
    RetryingReader,
)


@pytest.fixture
def stream_id() -> str:
    """Stream used by most tests."""
    return "cart-1"


@pytest.fixture
def event_store() -> InMemoryEventStore:
    """Create an in-memory event store."""
    return InMemoryEventStore()


@pytest.fixture
def document_store() -> InMemoryDocumentStore:
    """Create an in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def fast_policy() -> ReadRetryPolicy:
    """Retry policy with short deadlines and no backoff."""
    return ReadRetryPolicy(timeouts=(0.05, 0.05, 0.05), backoff_base=0.0)


@pytest.fixture
def reader(document_store: InMemoryDocumentStore, fast_policy: ReadRetryPolicy) -> RetryingReader:
    """Create a retrying reader over the in-memory document store."""
    return RetryingReader(document_store, fast_policy)
