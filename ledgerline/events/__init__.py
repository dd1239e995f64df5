"""Event store port consumed by the inline projection engine."""

from .store import (
    AppendOptions,
    AppendResult,
    EventStore,
    InMemoryEventStore,
    stream_version_of,
)

__all__ = [
    "AppendOptions",
    "AppendResult",
    "EventStore",
    "InMemoryEventStore",
    "stream_version_of",
]
