"""Inline projection definitions."""

from collections.abc import Awaitable, Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..domain import ReadEvent

if TYPE_CHECKING:
    from .applier import ApplyOutcome, ProjectionContext

DEFAULT_PROJECTION_NAME = "_default"

Document = dict[str, Any]
Evolve = Callable[[Document | None, ReadEvent], Document | None | Awaitable[Document | None]]
InitialState = Callable[[], Document]


@dataclass(frozen=True)
class ProjectionDefinition:
    """A named, versioned read model kept in sync with event streams.

    A definition declares which event types it is interested in and how
    to evolve its document from one event to the next. Definitions are
    immutable and built once per projection via ``inline_projection``.

    Attributes:
        name: Unique projection name; part of the storage path
        schema_version: Version recorded in every stored document's envelope
        can_handle: Event type names this projection is interested in
        evolve: ``(document | None, event) -> document | None``. May be a
            coroutine function. Returning None deletes the document.
        initial_state: Factory for the document used when nothing is stored
            yet. When absent the projection runs in nullable mode and
            ``evolve`` must handle a None document itself.
    """

    name: str
    schema_version: int
    can_handle: frozenset[str]
    evolve: Evolve
    initial_state: InitialState | None = None

    def handles(self, event_types: Iterable[str]) -> bool:
        """Check whether any of the given event types is of interest."""
        return not self.can_handle.isdisjoint(event_types)

    async def handle(
        self, events: Sequence[ReadEvent], context: "ProjectionContext"
    ) -> "ApplyOutcome":
        """Fold events into the stored document and persist the result."""
        from .applier import apply_projection

        return await apply_projection(self, events, context)


def inline_projection(
    *,
    can_handle: Iterable[str],
    evolve: Evolve,
    name: str = DEFAULT_PROJECTION_NAME,
    schema_version: int = 1,
    initial_state: InitialState | None = None,
) -> ProjectionDefinition:
    """Build a projection definition.

    Args:
        can_handle: Event type names that trigger this projection
        evolve: State evolution function (sync or async)
        name: Projection name, defaults to ``"_default"``
        schema_version: Schema version, defaults to 1
        initial_state: Optional factory for the initial document

    Returns:
        An immutable ProjectionDefinition

    Raises:
        ValueError: If the name is empty or the schema version is below 1

    Examples:
        >>> counter = inline_projection(
        ...     name="item-counter",
        ...     can_handle=["ItemAdded", "ItemRemoved"],
        ...     initial_state=lambda: {"count": 0},
        ...     evolve=lambda doc, event: {"count": doc["count"] + 1},
        ... )
    """
    if not name:
        raise ValueError("Projection name must not be empty")
    if schema_version < 1:
        raise ValueError(f"Projection schema version must be >= 1, got {schema_version}")
    if isinstance(can_handle, str):
        can_handle = [can_handle]
    return ProjectionDefinition(
        name=name,
        schema_version=schema_version,
        can_handle=frozenset(can_handle),
        evolve=evolve,
        initial_state=initial_state,
    )
