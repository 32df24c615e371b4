"""
Post GraphQL type definitions
"""

from enum import Enum
from typing import Any

import strawberry

from .user import User


@strawberry.enum
class PostStatus(Enum):
    """Post status enumeration.

    Member names are the client-facing tokens; values are what gets stored.
    """

    new = "Not Started"
    progress = "In Progress"
    completed = "Completed"


@strawberry.type
class Post:
    """Post type for GraphQL API."""

    id: strawberry.ID
    title: str | None
    description: str | None
    status: str | None
    creator_id: strawberry.Private[str | None]

    @strawberry.field
    async def creator(self, info: strawberry.Info) -> User | None:
        """Get the user who created this post."""
        from ..resolvers.post import resolve_post_creator

        return await resolve_post_creator(self, info)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Post":
        """Build a Post from a stored ``posts`` document."""
        return cls(
            id=strawberry.ID(document["id"]),
            title=document.get("title"),
            description=document.get("description"),
            status=document.get("status"),
            creator_id=document.get("creator_id"),
        )
