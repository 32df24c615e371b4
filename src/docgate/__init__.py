"""
docgate
GraphQL gateway over a users/posts document store
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
