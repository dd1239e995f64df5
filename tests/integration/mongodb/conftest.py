"""Pytest fixtures for MongoDB integration tests."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import pytest
import pytest_asyncio
from pymongo.errors import PyMongoError

from ledgerline.integrations.mongodb import MongoConfiguration, MongoDocumentStore

# Assumes a MongoDB container is running locally on port 27017
LOCAL_MONGO_URI = "mongodb://localhost:27017"


@asynccontextmanager
async def create_config(
    request: pytest.FixtureRequest,
    prefix: str = "test",
) -> AsyncIterator[MongoConfiguration]:
    """Create a MongoConfiguration with cleanup, skipping when MongoDB is down."""
    db_name = f"{prefix}_{request.node.name}"[:63]
    config = MongoConfiguration(
        uri=LOCAL_MONGO_URI,
        database=db_name,
        server_selection_timeout_ms=1000,
    )
    try:
        await config.client.admin.command("ping")
    except PyMongoError as err:
        await config.close()
        pytest.skip(f"MongoDB not reachable at {LOCAL_MONGO_URI}: {err}")

    await config.client.drop_database(config.database)
    try:
        yield config
    finally:
        if "client" in config.__dict__:
            await config.client.drop_database(config.database)
        await config.close()


@pytest_asyncio.fixture
async def mongo_config(request: pytest.FixtureRequest) -> AsyncIterator[MongoConfiguration]:
    """Create a MongoConfiguration pointing to local MongoDB."""
    async with create_config(request) as config:
        yield config


@pytest.fixture
def mongo_document_store(mongo_config: MongoConfiguration) -> MongoDocumentStore:
    """Create a document store backed by the test database."""
    return MongoDocumentStore(mongo_config)
