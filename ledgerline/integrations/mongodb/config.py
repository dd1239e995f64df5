"""MongoDB configuration using pydantic-settings."""

from functools import cached_property
from typing import Any

from pydantic_settings import BaseSettings

try:
    from pymongo.asynchronous.collection import AsyncCollection
    from pymongo.asynchronous.database import AsyncDatabase
    from pymongo.asynchronous.mongo_client import AsyncMongoClient
except ImportError as err:
    raise ImportError(
        "pymongo>=4.13 is required for MongoDB integration. "
        "Install it with: pip install ledgerline[mongodb]"
    ) from err


class MongoConfiguration(BaseSettings):
    """Configuration and factory for MongoDB resources.

    All settings can be configured via environment variables with the
    LEDGERLINE_MONGO_ prefix. For example:
    - LEDGERLINE_MONGO_URI=mongodb://localhost:27017
    - LEDGERLINE_MONGO_DATABASE=myapp
    - LEDGERLINE_MONGO_DOCUMENTS_COLLECTION=read_models

    The configuration also acts as a factory, providing lazy-initialized
    properties for the MongoDB client, database, and documents collection.
    ``close()`` drops the cached client so the next access opens a new one.

    Attributes:
        uri: MongoDB connection URI.
        database: Database name to use.
        documents_collection: Collection holding one MongoDB document per
            document-store path.
        server_selection_timeout_ms: How long the driver waits for a
            suitable server before failing an operation.
        connect_timeout_ms: TCP connect timeout.

    Example:
        >>> config = MongoConfiguration(database="shop")
        >>> store = MongoDocumentStore(config)
    """

    uri: str = "mongodb://localhost:27017"
    database: str = "ledgerline"
    documents_collection: str = "documents"
    server_selection_timeout_ms: int = 30000
    connect_timeout_ms: int = 20000

    model_config = {"env_prefix": "LEDGERLINE_MONGO_"}

    @cached_property
    def client(self) -> AsyncMongoClient[dict[str, Any]]:
        """Get the MongoDB async client.

        The client is lazily created and cached for reuse.
        """
        return AsyncMongoClient(
            self.uri,
            serverSelectionTimeoutMS=self.server_selection_timeout_ms,
            connectTimeoutMS=self.connect_timeout_ms,
        )

    @cached_property
    def db(self) -> AsyncDatabase[dict[str, Any]]:
        """Get the MongoDB async database."""
        return self.client[self.database]

    @cached_property
    def documents(self) -> AsyncCollection[dict[str, Any]]:
        """Get the documents collection."""
        return self.db[self.documents_collection]

    async def close(self) -> None:
        """Close the client if it was created and forget cached handles."""
        client = self.__dict__.pop("client", None)
        self.__dict__.pop("db", None)
        self.__dict__.pop("documents", None)
        if client is not None:
            await client.close()

    async def on_startup(self) -> None:
        """Called when the application starts.

        No-op for MongoDB - connections are established lazily.
        """
        pass

    async def on_shutdown(self) -> None:
        """Called when the application shuts down."""
        await self.close()
