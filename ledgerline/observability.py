"""Observability port for the inline projection engine.

Every call site depends on the ``Observability`` bundle, never on a
concrete tracing backend. The defaults are silent: the package logger
carries a ``NullHandler`` and the tracer is a no-op, so nothing is emitted
unless the host application configures logging or plugs in a tracer
(see ``ledgerline.integrations.otel``).
"""

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, ContextManager, Protocol

LOGGER = logging.getLogger("ledgerline")
LOGGER.addHandler(logging.NullHandler())

Attributes = Mapping[str, str | int | float | bool]


class Span(Protocol):
    """A unit of traced work."""

    def set_attribute(self, key: str, value: Any) -> None: ...

    def record_exception(self, exception: BaseException) -> None: ...

    def set_status(self, ok: bool) -> None: ...


class Tracer(Protocol):
    """Creates spans around engine operations."""

    def start_span(
        self, name: str, attributes: Attributes | None = None
    ) -> ContextManager[Span]: ...


class NoOpSpan:
    def set_attribute(self, key: str, value: Any) -> None:
        pass

    def record_exception(self, exception: BaseException) -> None:
        pass

    def set_status(self, ok: bool) -> None:
        pass


class NoOpTracer:
    """Tracer that records nothing."""

    @contextmanager
    def start_span(self, name: str, attributes: Attributes | None = None) -> Iterator[Span]:
        yield NoOpSpan()


@dataclass(frozen=True)
class Observability:
    """Logger and tracer used by the engine.

    Attributes:
        logger: Logger receiving engine diagnostics. Records carry
            structured ``extra`` fields (projection_name, stream_id, ...);
            event payloads are never logged.
        tracer: Tracer used to open spans around dispatch and per-projection
            work.

    Examples:
        >>> observability = Observability(logger=logging.getLogger("app.projections"))
    """

    logger: logging.Logger = field(default=LOGGER)
    tracer: Tracer = field(default_factory=NoOpTracer)


DEFAULT_OBSERVABILITY = Observability()
