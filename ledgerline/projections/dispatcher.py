"""Dispatch an appended event batch to every interested projection."""

from collections.abc import Sequence
from dataclasses import dataclass

from ..documents import DocumentStore, projection_path
from ..domain import ReadEvent
from ..observability import DEFAULT_OBSERVABILITY, Observability
from .applier import ApplyOutcome, ProjectionContext
from .definition import ProjectionDefinition
from .reader import RetryingReader


@dataclass(frozen=True)
class ProjectionResult:
    """Outcome of applying one batch to one projection."""

    name: str
    outcome: ApplyOutcome


async def handle_inline_projections(
    events: Sequence[ReadEvent],
    projections: Sequence[ProjectionDefinition],
    stream_id: str,
    document_store: DocumentStore,
    *,
    reader: RetryingReader | None = None,
    observability: Observability | None = None,
) -> list[ProjectionResult]:
    """Update every projection interested in a batch of events.

    Projections whose interest set shares no type with the batch are
    skipped without reading their document. Matching projections are
    processed one at a time, in the order given: read the stored document,
    then fold the whole batch into it and persist.

    There is no cross-projection atomicity. The first failing read or
    apply aborts the loop and is re-raised; projections already updated
    for this batch keep their new documents.

    Args:
        events: Ordered batch of events from one stream
        projections: Registered projections, in registration order
        stream_id: Stream the batch belongs to
        document_store: Store holding the projection documents
        reader: Reader used to fetch documents. Defaults to a RetryingReader
            over ``document_store`` with the default policy.
        observability: Logger and tracer

    Returns:
        One ProjectionResult per matching projection, in processing order.

    Raises:
        Exception: The first read or evolve error, unchanged.
    """
    observability = observability or DEFAULT_OBSERVABILITY
    reader = reader or RetryingReader(document_store, observability=observability)
    logger = observability.logger

    with observability.tracer.start_span(
        "ledgerline.handle_projections",
        {"ledgerline.stream_id": stream_id, "ledgerline.event_count": len(events)},
    ) as span:
        try:
            event_types = {event.type for event in events}
            matching = [projection for projection in projections if projection.handles(event_types)]

            logger.debug(
                "Handling inline projections",
                extra={
                    "stream_id": stream_id,
                    "event_count": len(events),
                    "projection_names": [projection.name for projection in matching],
                },
            )
            span.set_attribute("ledgerline.projection_count", len(matching))

            results = []
            for projection in matching:
                outcome = await _handle_projection(
                    projection, events, stream_id, document_store, reader, observability
                )
                results.append(ProjectionResult(projection.name, outcome))

            span.set_status(ok=True)
            logger.debug(
                "Projections handling completed",
                extra={"stream_id": stream_id, "projections_processed": len(results)},
            )
            return results
        except Exception as err:
            span.record_exception(err)
            span.set_status(ok=False)
            logger.error(
                "Failed to handle projections",
                exc_info=err,
                extra={"stream_id": stream_id},
            )
            raise


async def _handle_projection(
    projection: ProjectionDefinition,
    events: Sequence[ReadEvent],
    stream_id: str,
    document_store: DocumentStore,
    reader: RetryingReader,
    observability: Observability,
) -> ApplyOutcome:
    extra = {"projection_name": projection.name, "stream_id": stream_id}

    with observability.tracer.start_span(
        "ledgerline.projection.handle",
        {"ledgerline.projection_name": projection.name, "ledgerline.stream_id": stream_id},
    ) as span:
        try:
            reference = document_store.ref(projection_path(projection.name, stream_id))
            document = await reader.read(
                reference, projection_name=projection.name, stream_id=stream_id
            )
            observability.logger.debug(
                "Read projection document",
                extra={**extra, "document_found": document is not None},
            )

            outcome = await projection.handle(
                events,
                ProjectionContext(document=document, stream_id=stream_id, reference=reference),
            )
            span.set_attribute("ledgerline.outcome", outcome.value)
            span.set_status(ok=True)
            return outcome
        except Exception as err:
            span.record_exception(err)
            span.set_status(ok=False)
            observability.logger.error("Failed to handle projection", exc_info=err, extra=extra)
            raise
