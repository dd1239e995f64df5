"""Projection applier: fold a batch of events into one stored document."""

import inspect
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from ..documents import DocumentReference
from ..domain import ReadEvent
from .metadata import ReadModelMetadata, attach_metadata, strip_metadata

if TYPE_CHECKING:
    from .definition import ProjectionDefinition


class ApplyOutcome(str, Enum):
    """What applying a batch did to the stored document."""

    SKIPPED = "skipped"
    """The batch was empty; the store was not touched."""

    WRITTEN = "written"
    """The document was overwritten with the evolved state."""

    DELETED = "deleted"
    """Evolution yielded None and the document was deleted."""


@dataclass(frozen=True)
class ProjectionContext:
    """Everything the applier needs besides the definition and events.

    Attributes:
        document: The stored document (envelope included), or None
        stream_id: Stream the events belong to
        reference: Reference to the document's storage path
    """

    document: Any
    stream_id: str
    reference: DocumentReference


async def apply_projection(
    definition: "ProjectionDefinition",
    events: Sequence[ReadEvent],
    context: ProjectionContext,
) -> ApplyOutcome:
    """Evolve a projection document through a batch of events and persist it.

    Events are folded strictly in the order given; callers must supply them
    already ordered. The stored document is overwritten in full, never
    patched: fields the evolve function does not return are dropped.

    Args:
        definition: Projection to apply
        events: Ordered batch of events from a single stream
        context: Stored document, stream id and storage reference

    Returns:
        The ApplyOutcome describing what was persisted.

    Raises:
        Exception: Anything raised by the projection's evolve function,
            unchanged. Nothing is persisted in that case.
    """
    if not events:
        return ApplyOutcome.SKIPPED

    stored_state = strip_metadata(context.document)
    if definition.initial_state is not None:
        state = stored_state if stored_state is not None else definition.initial_state()
    else:
        state = stored_state

    for event in events:
        result = definition.evolve(state, event)
        if inspect.isawaitable(result):
            result = await result
        state = result

    if state is None:
        await context.reference.delete()
        return ApplyOutcome.DELETED

    metadata = ReadModelMetadata(
        stream_id=context.stream_id,
        name=definition.name,
        schema_version=definition.schema_version,
        stream_position=str(events[-1].metadata.stream_position),
    )
    await context.reference.set(attach_metadata(state, metadata))
    return ApplyOutcome.WRITTEN
