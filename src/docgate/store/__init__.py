"""
Document store interfaces and backends.
"""

from .base import (
    POSTS,
    USERS,
    CascadeDeleteError,
    Document,
    DocumentCollection,
    DocumentStore,
    StoreError,
)
from .factory import create_document_store
from .implementations import MemoryDocumentStore, SqlDocumentStore

__all__ = [
    "POSTS",
    "USERS",
    "CascadeDeleteError",
    "Document",
    "DocumentCollection",
    "DocumentStore",
    "MemoryDocumentStore",
    "SqlDocumentStore",
    "StoreError",
    "create_document_store",
]
