"""Document store port addressed by opaque ``/``-separated paths."""

from abc import ABC, abstractmethod
from typing import Any
from urllib.parse import quote

PROJECTIONS_ROOT = "projections"


def projection_path(projection_name: str, stream_id: str) -> str:
    """Build the storage path of one projection document.

    Each (projection, stream) pair has its own path, so documents for
    different projections or streams never collide. Both segments are
    percent-encoded, so a ``/`` inside a name or stream id stays inside its
    segment instead of addressing a child of another document.

    Raises:
        ValueError: If the projection name or stream id is empty

    Examples:
        >>> projection_path("cart-summary", "cart-42")
        'projections/cart-summary/cart-42'
        >>> projection_path("cart-summary", "tenant/cart-42")
        'projections/cart-summary/tenant%2Fcart-42'
    """
    if not projection_name or not stream_id:
        raise ValueError("Projection name and stream id must not be empty")
    return f"{PROJECTIONS_ROOT}/{quote(projection_name, safe='')}/{quote(stream_id, safe='')}"


def split_path(path: str) -> list[str]:
    """Split a path into its non-empty segments."""
    return [segment for segment in path.split("/") if segment]


class DocumentSnapshot:
    """Point-in-time result of reading a path.

    Reads are snapshot-then-extract: the store returns a snapshot and the
    caller extracts the value from it.
    """

    def __init__(self, value: Any) -> None:
        self._value = value

    def value(self) -> Any:
        """Return the stored value, or None if nothing is stored."""
        return self._value

    def exists(self) -> bool:
        return self._value is not None


class DocumentStore(ABC):
    """Abstract key-document store used to persist projection documents.

    Implementations must provide full-overwrite writes, subtree deletes and
    a coarse disconnect/reconnect pair used to recover from stalled reads.
    The store client is shared process-wide.
    """

    @abstractmethod
    async def get(self, path: str) -> DocumentSnapshot:
        """Read the value stored at a path."""
        ...

    @abstractmethod
    async def set(self, path: str, value: Any) -> None:
        """Overwrite the value stored at a path."""
        ...

    @abstractmethod
    async def delete(self, path: str) -> None:
        """Delete the value at a path and everything below it.

        Deleting a path that holds nothing is not an error.
        """
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Drop the connection to the backing service."""
        ...

    @abstractmethod
    async def reconnect(self) -> None:
        """Re-establish the connection to the backing service."""
        ...

    def ref(self, path: str) -> "DocumentReference":
        """Get a reference bound to a single path."""
        return DocumentReference(self, path)


class DocumentReference:
    """A document store bound to one path.

    Attributes:
        store: The store the reference reads and writes through
        path: The bound path
    """

    def __init__(self, store: DocumentStore, path: str) -> None:
        self.store = store
        self.path = path

    async def get(self) -> DocumentSnapshot:
        return await self.store.get(self.path)

    async def set(self, value: Any) -> None:
        await self.store.set(self.path, value)

    async def delete(self) -> None:
        await self.store.delete(self.path)

    def __repr__(self) -> str:
        return f"DocumentReference({self.path!r})"
