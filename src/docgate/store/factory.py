"""Factory for creating document stores from settings."""

from ..config import Settings
from ..logging import get_logger
from .base import DocumentStore
from .implementations.memory import MemoryDocumentStore
from .implementations.sql import SqlDocumentStore

logger = get_logger(__name__)


def create_document_store(settings: Settings) -> DocumentStore:
    """Create the document store selected by ``settings.store_backend``.

    Raises:
        ValueError: If the backend name is unknown
    """
    backend = settings.store_backend.lower()

    if backend == "memory":
        logger.info("Using in-memory document store")
        return MemoryDocumentStore()

    if backend == "sql":
        logger.info("Using SQL document store")
        return SqlDocumentStore(settings.database_url, echo=settings.sql_echo)

    raise ValueError(f"Unknown store backend: {settings.store_backend}")
