"""
User GraphQL type definitions
"""

from typing import Any

import strawberry


@strawberry.type
class User:
    """User type for GraphQL API."""

    id: strawberry.ID
    first_name: str | None
    email: str | None
    phone: str | None

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "User":
        """Build a User from a stored ``users`` document."""
        return cls(
            id=strawberry.ID(document["id"]),
            first_name=document.get("first_name"),
            email=document.get("email"),
            phone=document.get("phone"),
        )
