"""Document store implementations."""

from .memory import MemoryDocumentStore
from .sql import SqlDocumentStore

__all__ = ["MemoryDocumentStore", "SqlDocumentStore"]
