"""In-memory document store for tests and development."""

import copy
from typing import Any

from .store import DocumentSnapshot, DocumentStore, split_path

DataNode = dict[str, Any]


class InMemoryDocumentStore(DocumentStore):
    """Nested-dictionary document store.

    Paths address nodes of a tree: reading a parent path returns the whole
    subtree, and deleting it removes everything below. Values are deep
    copied on the way in and out so callers never share state with the
    store.

    This implementation is suitable for:
    - Unit tests (fast, no external dependencies)
    - Development and experimentation

    **NOT suitable for production**: no durability, no concurrency control.

    Attributes:
        disconnect_count: Number of disconnect() calls
        reconnect_count: Number of reconnect() calls
    """

    def __init__(self) -> None:
        self.root: DataNode = {}
        self.disconnect_count = 0
        self.reconnect_count = 0

    def reset(self) -> None:
        """Remove every stored value."""
        self.root = {}

    async def get(self, path: str) -> DocumentSnapshot:
        segments = split_path(path)
        if not segments:
            return DocumentSnapshot(copy.deepcopy(self.root) if self.root else None)

        node: Any = self.root
        for segment in segments:
            if not isinstance(node, dict) or segment not in node:
                return DocumentSnapshot(None)
            node = node[segment]
        return DocumentSnapshot(copy.deepcopy(node))

    async def set(self, path: str, value: Any) -> None:
        segments = split_path(path)
        if not segments:
            self.root = copy.deepcopy(value) if isinstance(value, dict) else {}
            return

        node = self.root
        for segment in segments[:-1]:
            if not isinstance(node.get(segment), dict):
                node[segment] = {}
            node = node[segment]
        node[segments[-1]] = copy.deepcopy(value)

    async def delete(self, path: str) -> None:
        segments = split_path(path)
        if not segments:
            self.root = {}
            return

        node: Any = self.root
        for segment in segments[:-1]:
            if not isinstance(node, dict) or segment not in node:
                return
            node = node[segment]
        if isinstance(node, dict):
            node.pop(segments[-1], None)

    async def disconnect(self) -> None:
        self.disconnect_count += 1

    async def reconnect(self) -> None:
        self.reconnect_count += 1
