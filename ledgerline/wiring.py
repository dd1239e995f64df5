"""Decorate an event store so appends update inline projections."""

from collections.abc import Sequence

from .documents import DocumentStore
from .domain import Event, ReadEvent, ReadEventMetadata
from .events import AppendOptions, AppendResult, EventStore, stream_version_of
from .observability import DEFAULT_OBSERVABILITY, Observability
from .projections import (
    ProjectionDefinition,
    ReadRetryPolicy,
    RetryingReader,
    handle_inline_projections,
)


def to_read_events(
    stream_name: str,
    events: Sequence[Event],
    stream_version: int,
) -> list[ReadEvent]:
    """Attach stream positions to a freshly appended batch.

    The store assigns strictly consecutive positions to one batch and
    reports the version after the batch, which is the position of its
    last event. For ``N`` events ending at version ``V`` the event at index
    ``i`` therefore sits at ``V - N + 1 + i``.

    Examples:
        >>> [e.stream_position for e in to_read_events("s", [a, b, c], 7)]
        [5, 6, 7]
    """
    first_position = stream_version - len(events) + 1
    read_events = []
    for index, event in enumerate(events):
        position = first_position + index
        read_events.append(
            ReadEvent(
                type=event.type,
                data=event.data,
                metadata=ReadEventMetadata(
                    stream_name=stream_name,
                    stream_position=position,
                    message_id=f"{stream_name}-{position}",
                ),
            )
        )
    return read_events


class InlineProjectionEventStore(EventStore):
    """Event store that updates inline projections after every append.

    Wraps another event store without modifying it. Appends are delegated
    to the inner store; once an append has committed, the batch is
    dispatched to the registered projections before the call returns.

    A projection failure is raised from ``append_to_stream`` even though
    the events are already durably stored. Callers must treat that as
    "appended, projections stale" and repair the read models out of band;
    retrying the append would duplicate the events.

    Concurrent appends to the same stream are not serialized here. Two
    overlapping updates of the same projection document can race and the
    later write wins. Serialize appends per stream externally when strict
    read-your-writes consistency is required.

    Attributes:
        inner: The wrapped event store
        document_store: Store holding the projection documents
        projections: Registered projections, in processing order
        reader: Reader used to fetch projection documents
        observability: Logger and tracer
    """

    def __init__(
        self,
        inner: EventStore,
        document_store: DocumentStore,
        projections: Sequence[ProjectionDefinition],
        reader: RetryingReader,
        observability: Observability,
    ):
        self.inner = inner
        self.document_store = document_store
        self.projections = tuple(projections)
        self.reader = reader
        self.observability = observability

    async def append_to_stream(
        self,
        stream_name: str,
        events: Sequence[Event],
        options: AppendOptions | None = None,
    ) -> AppendResult:
        result = await self.inner.append_to_stream(stream_name, events, options)
        if not events:
            return result

        read_events = to_read_events(stream_name, events, stream_version_of(result))
        await handle_inline_projections(
            read_events,
            self.projections,
            stream_name,
            self.document_store,
            reader=self.reader,
            observability=self.observability,
        )
        return result

    async def read_stream(self, stream_name: str, from_version: int = 0) -> list[ReadEvent]:
        return await self.inner.read_stream(stream_name, from_version)

    def __getattr__(self, name: str):
        if name == "inner":
            raise AttributeError(name)
        return getattr(self.inner, name)


def wire_inline_projections(
    event_store: EventStore,
    document_store: DocumentStore,
    projections: Sequence[ProjectionDefinition],
    *,
    read_policy: ReadRetryPolicy | None = None,
    observability: Observability | None = None,
) -> InlineProjectionEventStore:
    """Wrap an event store so that appends keep inline projections in sync.

    Args:
        event_store: Store to wrap; it is not modified
        document_store: Store holding the projection documents
        projections: Projections to update, processed in this order
        read_policy: Retry policy for document reads
        observability: Logger and tracer, silent by default

    Returns:
        A new event store with the same interface.

    Examples:
        >>> store = wire_inline_projections(
        ...     InMemoryEventStore(),
        ...     InMemoryDocumentStore(),
        ...     [cart_summary, item_counter],
        ... )
        >>> await store.append_to_stream("cart-1", [Event(type="ItemAdded", data={...})])
    """
    observability = observability or DEFAULT_OBSERVABILITY
    return InlineProjectionEventStore(
        inner=event_store,
        document_store=document_store,
        projections=projections,
        reader=RetryingReader(document_store, read_policy, observability),
        observability=observability,
    )
