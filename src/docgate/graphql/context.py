"""
Request context helpers shared by resolvers
"""

from typing import Any

import strawberry

from ..store.base import DocumentStore


def get_store(info: strawberry.Info) -> DocumentStore:
    """Return the document store injected into the GraphQL context.

    Raises:
        RuntimeError: If the context carries no store
    """
    context: Any = info.context
    store = context.get("store") if isinstance(context, dict) else getattr(context, "store", None)
    if store is None:
        raise RuntimeError("GraphQL context has no document store")
    return store
