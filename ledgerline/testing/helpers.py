"""Direct projection access for test suites.

These helpers bypass the dispatcher and the retrying reader: they read and
write projection documents straight through the document store.
"""

from collections.abc import Sequence
from typing import Any

from ..documents import PROJECTIONS_ROOT, DocumentStore, projection_path
from ..domain import Event, ReadEvent, ReadEventMetadata
from ..projections import ApplyOutcome, ProjectionContext, ProjectionDefinition
from ..projections.metadata import METADATA_KEY


def read_event(
    type: str,
    data: dict[str, Any] | None = None,
    *,
    position: int,
    stream_name: str = "test-stream",
) -> ReadEvent:
    """Build a read event at an explicit stream position.

    Examples:
        >>> read_event("ItemAdded", {"item_id": "sku-1"}, position=0)
    """
    return ReadEvent(
        type=type,
        data=data or {},
        metadata=ReadEventMetadata(
            stream_name=stream_name,
            stream_position=position,
            message_id=f"{stream_name}-{position}",
        ),
    )


def read_events(
    events: Sequence[Event],
    *,
    stream_name: str = "test-stream",
    start: int = 0,
) -> list[ReadEvent]:
    """Assign consecutive positions, beginning at ``start``, to events."""
    return [
        read_event(event.type, event.data, position=start + index, stream_name=stream_name)
        for index, event in enumerate(events)
    ]


async def apply_projection_for_test(
    projection: ProjectionDefinition,
    events: Sequence[ReadEvent],
    *,
    document_store: DocumentStore,
    stream_id: str,
) -> ApplyOutcome:
    """Apply events to one projection, reading its document without retries."""
    reference = document_store.ref(projection_path(projection.name, stream_id))
    snapshot = await reference.get()
    return await projection.handle(
        events,
        ProjectionContext(document=snapshot.value(), stream_id=stream_id, reference=reference),
    )


async def read_projection_state(
    document_store: DocumentStore,
    projection_name: str,
    stream_id: str,
) -> dict[str, Any] | None:
    """Read a stored projection document.

    The envelope's ``streamPosition`` is converted back from its decimal
    string to an int.

    Returns:
        The stored document, or None if nothing usable is stored.
    """
    snapshot = await document_store.get(projection_path(projection_name, stream_id))
    document = snapshot.value()
    if not isinstance(document, dict) or not document:
        return None

    metadata = document.get(METADATA_KEY)
    if isinstance(metadata, dict) and isinstance(metadata.get("streamPosition"), str):
        document[METADATA_KEY] = {**metadata, "streamPosition": int(metadata["streamPosition"])}
    return document


async def clear_projection(
    document_store: DocumentStore,
    projection_name: str,
    stream_id: str,
) -> None:
    """Delete one projection document."""
    await document_store.delete(projection_path(projection_name, stream_id))


async def clear_all_projections(document_store: DocumentStore) -> None:
    """Delete every projection document of every projection."""
    await document_store.delete(PROJECTIONS_ROOT)
