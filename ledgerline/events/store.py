"""Event store interfaces and an in-memory implementation."""

from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, Field

from ..domain import Event, ReadEvent, ReadEventMetadata
from ..domain.exceptions import ConcurrencyError


class AppendOptions(BaseModel):
    """Options for a single append call.

    Attributes:
        expected_stream_version: Version the stream is expected to be at
            before the append. ``None`` disables the concurrency check.
    """

    expected_stream_version: int | None = None


class AppendResult(BaseModel):
    """Result of appending a batch of events to a stream.

    Stores report the stream version after the append under
    ``next_expected_stream_version``. Older stores used ``stream_version``
    for the same value; both are accepted by ``stream_version_of``.
    """

    next_expected_stream_version: int | None = None
    stream_version: int | None = None
    created_new_stream: bool = False


def stream_version_of(result: Any) -> int:
    """Recover the post-append stream version from an append result.

    Accepts models, plain objects and mappings. The newer
    ``next_expected_stream_version`` name is preferred over the legacy
    ``stream_version``.

    Args:
        result: Value returned by an event store's append operation

    Returns:
        The stream version after the append

    Raises:
        ValueError: If the result carries neither field
    """
    for field_name in ("next_expected_stream_version", "stream_version"):
        if isinstance(result, Mapping):
            value = result.get(field_name)
        else:
            value = getattr(result, field_name, None)
        if value is not None:
            return int(value)
    raise ValueError(f"Append result {result!r} does not report a stream version")


class EventStore(ABC):
    """Abstract interface for an append-only, stream-partitioned event log.

    Key responsibilities:
    - **Durability**: Events survive system failures
    - **Ordering**: Events in a stream get strictly consecutive positions,
      assigned by the store (never by the caller)
    - **Concurrency Control**: Optimistic locking via expected_stream_version
    """

    @abstractmethod
    async def append_to_stream(
        self,
        stream_name: str,
        events: Sequence[Event],
        options: AppendOptions | None = None,
    ) -> AppendResult:
        """Append a batch of events to a stream.

        Args:
            stream_name: Stream to append to
            events: Events to append, in order
            options: Optional append options

        Returns:
            AppendResult carrying the stream version after the append, which
            is the position of the last appended event.

        Raises:
            ConcurrencyError: If the expected version doesn't match.
        """
        ...

    @abstractmethod
    async def read_stream(
        self,
        stream_name: str,
        from_version: int = 0,
    ) -> list[ReadEvent]:
        """Read events from a stream.

        Args:
            stream_name: Stream to read
            from_version: Minimum stream position to return (inclusive)

        Returns:
            Stored events in position order.
        """
        ...


class InMemoryEventStore(EventStore):
    """Dictionary-based in-memory event store for testing.

    Positions are 1-based: the first event of a stream is at position 1 and
    the stream version equals the number of stored events.

    **NOT suitable for production**: no durability, memory grows unbounded.
    """

    def __init__(self) -> None:
        """Initialize an empty in-memory event store."""
        self.by_stream: dict[str, list[ReadEvent]] = defaultdict(list)

    async def append_to_stream(
        self,
        stream_name: str,
        events: Sequence[Event],
        options: AppendOptions | None = None,
    ) -> AppendResult:
        stored = self.by_stream[stream_name]
        current_version = len(stored)

        expected = options.expected_stream_version if options else None
        if expected is not None and expected != current_version:
            raise ConcurrencyError(
                f"Expected version {expected}, got {current_version} for stream {stream_name}"
            )

        for offset, event in enumerate(events, start=1):
            position = current_version + offset
            stored.append(
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

        return AppendResult(
            next_expected_stream_version=len(stored),
            created_new_stream=current_version == 0 and len(events) > 0,
        )

    async def read_stream(
        self,
        stream_name: str,
        from_version: int = 0,
    ) -> list[ReadEvent]:
        return [
            event
            for event in self.by_stream.get(stream_name, [])
            if event.stream_position >= from_version
        ]
