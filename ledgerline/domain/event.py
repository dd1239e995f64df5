from typing import Any

from pydantic import BaseModel, Field


class Event(BaseModel):
    """A fact to be appended to an event stream.

    Events are identified by their ``type`` name, which is what projections
    declare interest in. The payload is an arbitrary JSON-like mapping.

    Attributes:
        type: Event type name (e.g. ``"ItemAdded"``)
        data: Event payload
        metadata: Optional caller-supplied metadata. Replaced by
            ReadEventMetadata once the event has been stored.

    Examples:
        >>> event = Event(type="ItemAdded", data={"item_id": "sku-1", "quantity": 2})
    """

    type: str = Field(description="Event type name used for projection routing")
    data: dict[str, Any] = Field(
        default_factory=dict,
        description="Event payload",
    )
    metadata: dict[str, Any] | None = Field(
        default=None,
        description="Optional caller-supplied metadata",
    )


class ReadEventMetadata(BaseModel):
    """Position information attached to an event by the event store.

    Attributes:
        stream_name: Name of the stream the event belongs to
        stream_position: Position of the event within its stream. Assigned
            by the store at append time, monotonically increasing per stream.
            Kept as an arbitrary-precision int.
        message_id: Identifier of the stored message
    """

    stream_name: str
    stream_position: int = Field(ge=0)
    message_id: str


class ReadEvent(Event):
    """An event as read back from (or confirmed by) the event store.

    Examples:
        >>> event = ReadEvent(
        ...     type="ItemAdded",
        ...     data={"item_id": "sku-1"},
        ...     metadata=ReadEventMetadata(
        ...         stream_name="cart-1",
        ...         stream_position=3,
        ...         message_id="cart-1-3",
        ...     ),
        ... )
    """

    metadata: ReadEventMetadata  # type: ignore[assignment]

    @property
    def stream_position(self) -> int:
        return self.metadata.stream_position
