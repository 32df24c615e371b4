"""Core document store interfaces."""

import uuid
from abc import ABC, abstractmethod
from typing import Any

Document = dict[str, Any]

USERS = "users"
POSTS = "posts"


class StoreError(Exception):
    """Base exception for document store operations."""

    pass


class CascadeDeleteError(StoreError):
    """A dependent-record removal failed part way through a cascade.

    Records removed before the failure stay removed.
    """

    def __init__(
        self,
        user_id: str,
        removed_post_ids: list[str],
        remaining_post_ids: list[str],
        cause: Exception | None = None,
    ):
        self.user_id = user_id
        self.removed_post_ids = removed_post_ids
        self.remaining_post_ids = remaining_post_ids
        self.cause = cause
        super().__init__(
            f"Could not delete user {user_id}: removed {len(removed_post_ids)} post(s) "
            f"before failing, {len(remaining_post_ids)} post(s) remain"
        )


def new_document_id() -> str:
    """Return a fresh opaque document identifier."""
    return uuid.uuid4().hex


def matches(document: Document, filter: Document | None) -> bool:
    """Return True when every key in ``filter`` equals the document's value."""
    if not filter:
        return True
    return all(key in document and document[key] == value for key, value in filter.items())


class DocumentCollection(ABC):
    """Abstract base class for a named collection of documents.

    Documents are plain dicts carrying a string ``id``. Every method returns
    copies, so callers may mutate results freely.
    """

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    async def find_by_id(self, id: str) -> Document | None:
        """Return the document with ``id``, or None if absent."""
        pass

    @abstractmethod
    async def find(self, filter: Document | None = None) -> list[Document]:
        """Return all documents matching ``filter`` (all documents when empty).

        Order is not guaranteed.
        """
        pass

    @abstractmethod
    async def insert(self, record: Document) -> Document:
        """Store ``record`` under a new id and return the stored document.

        Raises:
            StoreError: On write failure
        """
        pass

    @abstractmethod
    async def find_by_id_and_update(self, id: str, patch: Document) -> Document | None:
        """Overwrite only the keys in ``patch`` and return the updated document.

        The ``id`` key is never overwritten. Returns None if ``id`` is absent.
        """
        pass

    @abstractmethod
    async def find_by_id_and_remove(self, id: str) -> Document | None:
        """Remove the document with ``id`` and return it, or None if absent."""
        pass


class DocumentStore(ABC):
    """A document store exposing the ``users`` and ``posts`` collections."""

    users: DocumentCollection
    posts: DocumentCollection

    async def create_schema(self) -> None:
        """Prepare backing storage. No-op unless the backend needs it."""
        return None

    async def close(self) -> None:
        """Release any resources held by the store."""
        return None
