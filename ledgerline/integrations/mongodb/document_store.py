"""MongoDB implementation of the document store port."""

import re
from typing import Any

from ...documents import DocumentSnapshot, DocumentStore, split_path
from .config import MongoConfiguration


def normalize_path(path: str) -> str:
    return "/".join(split_path(path))


class MongoDocumentStore(DocumentStore):
    """Document store keeping one MongoDB document per path.

    Document structure:
        {
            "_id": "projections/cart-summary/cart-42",
            "value": {...}
        }

    Only leaf paths can be read; deleting a path removes the path itself
    and every path below it, so ``delete("projections")`` clears all
    projection documents.

    Examples:
        >>> config = MongoConfiguration(uri="mongodb://localhost:27017")
        >>> store = MongoDocumentStore(config)
        >>> await store.set("projections/cart/cart-1", {"total": 3})
        >>> (await store.get("projections/cart/cart-1")).value()
        {'total': 3}
    """

    def __init__(self, config: MongoConfiguration):
        """Initialize the MongoDB document store.

        Args:
            config: MongoDB configuration providing the collection
        """
        self.config = config

    async def get(self, path: str) -> DocumentSnapshot:
        doc = await self.config.documents.find_one({"_id": normalize_path(path)})
        return DocumentSnapshot(doc["value"] if doc else None)

    async def set(self, path: str, value: Any) -> None:
        key = normalize_path(path)
        await self.config.documents.replace_one(
            {"_id": key}, {"_id": key, "value": value}, upsert=True
        )

    async def delete(self, path: str) -> None:
        key = normalize_path(path)
        if not key:
            await self.config.documents.delete_many({})
            return
        await self.config.documents.delete_many(
            {
                "$or": [
                    {"_id": key},
                    {"_id": {"$regex": f"^{re.escape(key)}/"}},
                ]
            }
        )

    async def disconnect(self) -> None:
        await self.config.close()

    async def reconnect(self) -> None:
        # Touching the client property recreates it; the driver connects lazily.
        _ = self.config.client
