"""
Shared pytest fixtures and configuration for all tests.
"""

from collections.abc import AsyncGenerator, Generator
from typing import Any

import pytest
import pytest_asyncio

from docgate.graphql.schema import schema
from docgate.store.base import DocumentStore
from docgate.store.implementations.memory import MemoryDocumentStore
from docgate.store.implementations.sql import SqlDocumentStore


@pytest_asyncio.fixture(params=["memory", "sql"])
async def store(request: pytest.FixtureRequest) -> AsyncGenerator[DocumentStore, None]:
    """Provide an empty document store, once per backend."""
    if request.param == "sql":
        document_store: DocumentStore = SqlDocumentStore("sqlite+aiosqlite:///:memory:")
    else:
        document_store = MemoryDocumentStore()

    await document_store.create_schema()
    yield document_store
    await document_store.close()


@pytest.fixture
def execute(store: DocumentStore):
    """Execute a GraphQL document against ``store``."""

    async def _execute(query: str, variables: dict[str, Any] | None = None):
        return await schema.execute(
            query,
            variable_values=variables,
            context_value={"store": store},
        )

    return _execute


@pytest_asyncio.fixture
async def alice(store: DocumentStore) -> dict[str, Any]:
    """A stored user document."""
    return await store.users.insert(
        {"first_name": "Alice", "email": "alice@example.com", "phone": "07516"}
    )


@pytest_asyncio.fixture
async def bob(store: DocumentStore) -> dict[str, Any]:
    """A second stored user document."""
    return await store.users.insert(
        {"first_name": "Bob", "email": "bob@example.com", "phone": "07517"}
    )


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    import os

    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
