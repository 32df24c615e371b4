"""
Root GraphQL mutation definitions
"""

import strawberry

from ..types.post import Post, PostStatus
from ..types.user import User


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    # User mutations
    @strawberry.mutation(name="createUser")
    async def create_user(
        self, info: strawberry.Info, first_name: str, email: str, phone: str
    ) -> User | None:
        """Create a new user."""
        from ..resolvers.user import create_user

        return await create_user(info, first_name, email, phone)

    @strawberry.mutation(name="deleteUser")
    async def delete_user(self, info: strawberry.Info, id: strawberry.ID) -> User | None:
        """Delete a user along with every post they created."""
        from ..resolvers.user import delete_user

        return await delete_user(info, id)

    # Post mutations
    @strawberry.mutation(name="createPost")
    async def create_post(
        self,
        info: strawberry.Info,
        creator_id: strawberry.ID,
        title: str,
        description: str,
        status: PostStatus = PostStatus.new,
    ) -> Post | None:
        """Create a new post."""
        from ..resolvers.post import create_post

        return await create_post(info, creator_id, title, description, status)

    @strawberry.mutation(name="updatePost")
    async def update_post(
        self,
        info: strawberry.Info,
        id: strawberry.ID,
        title: str | None = None,
        description: str | None = None,
        status: PostStatus | None = None,
    ) -> Post | None:
        """Update the supplied fields of a post."""
        from ..resolvers.post import update_post

        return await update_post(info, id, title, description, status)

    @strawberry.mutation(name="deletePost")
    async def delete_post(self, info: strawberry.Info, id: strawberry.ID) -> Post | None:
        """Delete a post."""
        from ..resolvers.post import delete_post

        return await delete_post(info, id)
