"""OpenTelemetry tracer adapter.

Installation:
    pip install ledgerline[otel]

Usage:
    >>> from ledgerline import Observability, wire_inline_projections
    >>> from ledgerline.integrations.otel import OpenTelemetryTracer
    >>>
    >>> store = wire_inline_projections(
    ...     event_store,
    ...     document_store,
    ...     projections,
    ...     observability=Observability(tracer=OpenTelemetryTracer()),
    ... )
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from ..observability import Attributes

TRACER_NAME = "ledgerline"


class OpenTelemetrySpan:
    """Span port backed by an OpenTelemetry span."""

    def __init__(self, span: trace.Span):
        self.span = span

    def set_attribute(self, key: str, value: Any) -> None:
        self.span.set_attribute(key, value)

    def record_exception(self, exception: BaseException) -> None:
        self.span.record_exception(exception)

    def set_status(self, ok: bool) -> None:
        self.span.set_status(Status(StatusCode.OK if ok else StatusCode.ERROR))


class OpenTelemetryTracer:
    """Tracer port backed by the globally configured OpenTelemetry provider.

    Args:
        tracer_provider: Provider to take the tracer from. Defaults to the
            global provider.
    """

    def __init__(self, tracer_provider: trace.TracerProvider | None = None):
        self.tracer = trace.get_tracer(TRACER_NAME, tracer_provider=tracer_provider)

    @contextmanager
    def start_span(
        self, name: str, attributes: Attributes | None = None
    ) -> Iterator[OpenTelemetrySpan]:
        # Status and exceptions are recorded explicitly by the engine.
        with self.tracer.start_as_current_span(
            name,
            attributes=dict(attributes) if attributes else None,
            record_exception=False,
            set_status_on_exception=False,
        ) as span:
            yield OpenTelemetrySpan(span)
