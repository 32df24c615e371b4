from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...logging import get_logger
from ...store.base import CascadeDeleteError, Document, DocumentStore, StoreError
from ..context import get_store

if TYPE_CHECKING:
    from ..types.user import User

logger = get_logger(__name__)


# Query resolvers
async def resolve_user_by_id(info: strawberry.Info, id: str | None) -> User | None:
    """Resolve a single user. A missing or unknown id resolves to None."""
    if id is None:
        return None

    document = await get_store(info).users.find_by_id(str(id))
    if document is None:
        logger.debug("User not found", user_id=str(id))
        return None

    from ..types.user import User as UserType

    return UserType.from_document(document)


async def resolve_users(info: strawberry.Info) -> list[User]:
    """Resolve every user in the store."""
    from ..types.user import User as UserType

    documents = await get_store(info).users.find()
    return [UserType.from_document(document) for document in documents]


# Mutations
async def create_user(info: strawberry.Info, first_name: str, email: str, phone: str) -> User:
    """Insert a new user built from exactly the submitted arguments."""
    document = await get_store(info).users.insert(
        {"first_name": first_name, "email": email, "phone": phone}
    )
    logger.info("User created", user_id=document["id"])

    from ..types.user import User as UserType

    return UserType.from_document(document)


async def delete_user_cascade(store: DocumentStore, user_id: str) -> Document | None:
    """Remove every post created by ``user_id``, then the user itself.

    Post ids are collected up front and removed one at a time. The first
    failing removal stops the cascade: the user is kept and a
    CascadeDeleteError reports which posts were already removed. Nothing is
    rolled back.

    Returns:
        The removed user document, or None if no such user existed
    """
    dependent_posts = await store.posts.find({"creator_id": user_id})
    pending = [post["id"] for post in dependent_posts]
    removed: list[str] = []

    for index, post_id in enumerate(pending):
        try:
            await store.posts.find_by_id_and_remove(post_id)
        except StoreError as e:
            remaining = pending[index:]
            logger.error(
                "User cascade delete aborted",
                user_id=user_id,
                failed_post_id=post_id,
                removed=len(removed),
                remaining=len(remaining),
                error=str(e),
            )
            raise CascadeDeleteError(user_id, removed, remaining, cause=e) from e
        removed.append(post_id)

    document = await store.users.find_by_id_and_remove(user_id)
    if document is None:
        logger.debug("User not found for delete", user_id=user_id, removed_posts=len(removed))
    else:
        logger.info("User deleted", user_id=user_id, removed_posts=len(removed))
    return document


async def delete_user(info: strawberry.Info, id: str) -> User | None:
    """Delete a user and their posts. Returns None if the user did not exist."""
    document = await delete_user_cascade(get_store(info), str(id))
    if document is None:
        return None

    from ..types.user import User as UserType

    return UserType.from_document(document)
