"""Ledgerline - inline projections for event-sourced Python services.

Keeps read models in a document store in sync with an append-only event
log: every append is followed, before the call returns, by an update of
each projection interested in the appended event types.

This module provides the public API.
"""

from .documents import DocumentStore, InMemoryDocumentStore, projection_path
from .domain import (
    ConcurrencyError,
    Event,
    ProjectionReadError,
    ReadEvent,
    ReadEventMetadata,
    ReadTimeout,
    RetriesExhausted,
)
from .events import AppendOptions, AppendResult, EventStore, InMemoryEventStore
from .observability import NoOpTracer, Observability
from .projections import (
    DEFAULT_PROJECTION_NAME,
    ApplyOutcome,
    ProjectionDefinition,
    ReadModelMetadata,
    ReadRetryPolicy,
    RetryingReader,
    apply_projection,
    handle_inline_projections,
    inline_projection,
)
from .wiring import InlineProjectionEventStore, wire_inline_projections

__all__ = [
    # Wiring
    "InlineProjectionEventStore",
    "wire_inline_projections",
    # Projections
    "DEFAULT_PROJECTION_NAME",
    "ApplyOutcome",
    "ProjectionDefinition",
    "ReadModelMetadata",
    "ReadRetryPolicy",
    "RetryingReader",
    "apply_projection",
    "handle_inline_projections",
    "inline_projection",
    # Domain
    "Event",
    "ReadEvent",
    "ReadEventMetadata",
    # Errors
    "ConcurrencyError",
    "ProjectionReadError",
    "ReadTimeout",
    "RetriesExhausted",
    # Stores
    "AppendOptions",
    "AppendResult",
    "DocumentStore",
    "EventStore",
    "InMemoryDocumentStore",
    "InMemoryEventStore",
    "projection_path",
    # Observability
    "NoOpTracer",
    "Observability",
]
