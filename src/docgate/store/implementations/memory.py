"""In-process document store backed by dicts."""

import asyncio
import copy

from ...logging import get_logger
from ..base import (
    POSTS,
    USERS,
    Document,
    DocumentCollection,
    DocumentStore,
    matches,
    new_document_id,
)

logger = get_logger(__name__)


class MemoryCollection(DocumentCollection):
    """Dict-backed collection. Writes are serialized with an asyncio lock."""

    def __init__(self, name: str):
        super().__init__(name)
        self._documents: dict[str, Document] = {}
        self._lock = asyncio.Lock()

    async def find_by_id(self, id: str) -> Document | None:
        document = self._documents.get(id)
        return copy.deepcopy(document) if document is not None else None

    async def find(self, filter: Document | None = None) -> list[Document]:
        return [
            copy.deepcopy(document)
            for document in self._documents.values()
            if matches(document, filter)
        ]

    async def insert(self, record: Document) -> Document:
        async with self._lock:
            document = copy.deepcopy(record)
            document["id"] = new_document_id()
            self._documents[document["id"]] = document
            logger.debug("Inserted document", collection=self.name, id=document["id"])
            return copy.deepcopy(document)

    async def find_by_id_and_update(self, id: str, patch: Document) -> Document | None:
        async with self._lock:
            document = self._documents.get(id)
            if document is None:
                return None
            document.update({key: value for key, value in patch.items() if key != "id"})
            return copy.deepcopy(document)

    async def find_by_id_and_remove(self, id: str) -> Document | None:
        async with self._lock:
            document = self._documents.pop(id, None)
            return copy.deepcopy(document) if document is not None else None

    def __len__(self) -> int:
        return len(self._documents)


class MemoryDocumentStore(DocumentStore):
    """Document store living entirely in process memory."""

    def __init__(self):
        self.users = MemoryCollection(USERS)
        self.posts = MemoryCollection(POSTS)
