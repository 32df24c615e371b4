from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...logging import get_logger
from ..context import get_store

if TYPE_CHECKING:
    from ..types.post import Post, PostStatus
    from ..types.user import User

logger = get_logger(__name__)


# Query resolvers
async def resolve_post_by_id(info: strawberry.Info, id: str | None) -> Post | None:
    """Resolve a single post. A missing or unknown id resolves to None."""
    if id is None:
        return None

    document = await get_store(info).posts.find_by_id(str(id))
    if document is None:
        logger.debug("Post not found", post_id=str(id))
        return None

    from ..types.post import Post as PostType

    return PostType.from_document(document)


async def resolve_posts(info: strawberry.Info) -> list[Post]:
    """Resolve every post in the store."""
    from ..types.post import Post as PostType

    documents = await get_store(info).posts.find()
    return [PostType.from_document(document) for document in documents]


# Post field resolvers
async def resolve_post_creator(post: Post, info: strawberry.Info) -> User | None:
    """Look up the creator of ``post``.

    Runs a fresh point lookup on every call. A dangling reference resolves to None.
    """
    if not post.creator_id:
        return None

    document = await get_store(info).users.find_by_id(post.creator_id)
    if document is None:
        logger.debug("Post creator not found", post_id=str(post.id), creator_id=post.creator_id)
        return None

    from ..types.user import User as UserType

    return UserType.from_document(document)


# Mutations
async def create_post(
    info: strawberry.Info,
    creator_id: str,
    title: str,
    description: str,
    status: PostStatus,
) -> Post:
    """Insert a new post. The creator reference is stored as given."""
    document = await get_store(info).posts.insert(
        {
            "creator_id": str(creator_id),
            "title": title,
            "description": description,
            "status": status.value,
        }
    )
    logger.info("Post created", post_id=document["id"], creator_id=document["creator_id"])

    from ..types.post import Post as PostType

    return PostType.from_document(document)


async def update_post(
    info: strawberry.Info,
    id: str,
    title: str | None = None,
    description: str | None = None,
    status: PostStatus | None = None,
) -> Post | None:
    """Overwrite only the supplied fields of a post.

    Arguments left out (or sent as null) keep their stored value.
    """
    patch: dict[str, str] = {}
    if title is not None:
        patch["title"] = title
    if description is not None:
        patch["description"] = description
    if status is not None:
        patch["status"] = status.value

    document = await get_store(info).posts.find_by_id_and_update(str(id), patch)
    if document is None:
        logger.debug("Post not found for update", post_id=str(id))
        return None

    logger.info("Post updated", post_id=str(id), fields=sorted(patch))

    from ..types.post import Post as PostType

    return PostType.from_document(document)


async def delete_post(info: strawberry.Info, id: str) -> Post | None:
    """Delete a post. Returns None if it did not exist."""
    document = await get_store(info).posts.find_by_id_and_remove(str(id))
    if document is None:
        logger.debug("Post not found for delete", post_id=str(id))
        return None

    logger.info("Post deleted", post_id=str(id))

    from ..types.post import Post as PostType

    return PostType.from_document(document)
