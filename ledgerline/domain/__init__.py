from .event import Event, ReadEvent, ReadEventMetadata
from .exceptions import (
    ConcurrencyError,
    ProjectionReadError,
    ReadTimeout,
    RetriesExhausted,
)

__all__ = [
    "ConcurrencyError",
    "Event",
    "ProjectionReadError",
    "ReadEvent",
    "ReadEventMetadata",
    "ReadTimeout",
    "RetriesExhausted",
]
