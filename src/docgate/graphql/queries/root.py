"""
Root GraphQL query definitions
"""

import strawberry

from ..types.post import Post
from ..types.user import User


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def user(self, info: strawberry.Info, id: strawberry.ID | None = None) -> User | None:
        """Get a user by ID."""
        from ..resolvers.user import resolve_user_by_id

        return await resolve_user_by_id(info, id)

    @strawberry.field
    async def users(self, info: strawberry.Info) -> list[User] | None:
        """Get all users."""
        from ..resolvers.user import resolve_users

        return await resolve_users(info)

    @strawberry.field
    async def post(self, info: strawberry.Info, id: strawberry.ID | None = None) -> Post | None:
        """Get a post by ID."""
        from ..resolvers.post import resolve_post_by_id

        return await resolve_post_by_id(info, id)

    @strawberry.field
    async def posts(self, info: strawberry.Info) -> list[Post] | None:
        """Get all posts."""
        from ..resolvers.post import resolve_posts

        return await resolve_posts(info)
