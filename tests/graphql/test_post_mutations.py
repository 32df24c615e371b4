"""
Tests for createPost / updatePost / deletePost
"""

from typing import Any
from unittest.mock import patch

import pytest
import pytest_asyncio

from docgate.store.base import DocumentStore, StoreError

CREATE_POST = """
mutation CreatePost(
  $creatorId: ID!
  $title: String!
  $description: String!
  $status: PostStatus
) {
  createPost(
    creatorId: $creatorId
    title: $title
    description: $description
    status: $status
  ) {
    id
    title
    description
    status
    creator {
      id
    }
  }
}
"""


@pytest_asyncio.fixture
async def post(store: DocumentStore, alice: dict[str, Any]) -> dict[str, Any]:
    return await store.posts.insert(
        {
            "title": "Hello",
            "description": "First Post!",
            "status": "Not Started",
            "creator_id": alice["id"],
        }
    )


class TestCreatePost:
    @pytest.mark.asyncio
    async def test_status_defaults_to_not_started(
        self, execute, store: DocumentStore, alice: dict[str, Any]
    ) -> None:
        result = await execute(
            'mutation ($id: ID!) { createPost(creatorId: $id, title: "Hello", '
            'description: "First Post!") { id status } }',
            {"id": alice["id"]},
        )

        assert result.errors is None
        assert result.data["createPost"]["status"] == "Not Started"
        stored = await store.posts.find_by_id(result.data["createPost"]["id"])
        assert stored["status"] == "Not Started"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "token, stored",
        [("new", "Not Started"), ("progress", "In Progress"), ("completed", "Completed")],
    )
    async def test_status_tokens(
        self, execute, store: DocumentStore, alice: dict[str, Any], token: str, stored: str
    ) -> None:
        result = await execute(
            CREATE_POST,
            {"creatorId": alice["id"], "title": "t", "description": "d", "status": token},
        )

        assert result.errors is None
        assert result.data["createPost"]["status"] == stored

    @pytest.mark.asyncio
    async def test_arguments_map_onto_stored_record(
        self, execute, store: DocumentStore, alice: dict[str, Any]
    ) -> None:
        result = await execute(
            CREATE_POST,
            {"creatorId": alice["id"], "title": "Hello", "description": "First Post!"},
        )

        assert result.errors is None
        assert result.data["createPost"]["creator"] == {"id": alice["id"]}
        stored = await store.posts.find_by_id(result.data["createPost"]["id"])
        assert stored == {
            "id": result.data["createPost"]["id"],
            "creator_id": alice["id"],
            "title": "Hello",
            "description": "First Post!",
            "status": "Not Started",
        }

    @pytest.mark.asyncio
    async def test_unknown_creator_is_accepted(self, execute, store: DocumentStore) -> None:
        result = await execute(
            CREATE_POST, {"creatorId": "nobody", "title": "t", "description": "d"}
        )

        assert result.errors is None
        assert result.data["createPost"]["creator"] is None
        assert len(await store.posts.find()) == 1

    @pytest.mark.asyncio
    async def test_invalid_status_token_is_rejected(
        self, execute, store: DocumentStore, alice: dict[str, Any]
    ) -> None:
        result = await execute(
            CREATE_POST,
            {"creatorId": alice["id"], "title": "t", "description": "d", "status": "Not Started"},
        )

        assert result.data is None
        assert result.errors
        assert len(await store.posts.find()) == 0

    @pytest.mark.asyncio
    async def test_missing_title_writes_nothing(
        self, execute, store: DocumentStore, alice: dict[str, Any]
    ) -> None:
        result = await execute(
            'mutation ($id: ID!) { createPost(creatorId: $id, description: "d") { id } }',
            {"id": alice["id"]},
        )

        assert result.data is None
        assert "title" in result.errors[0].message
        assert len(await store.posts.find()) == 0


class TestUpdatePost:
    @pytest.mark.asyncio
    async def test_status_only_leaves_other_fields(
        self, execute, post: dict[str, Any]
    ) -> None:
        result = await execute(
            "mutation ($id: ID!) { updatePost(id: $id, status: completed) "
            "{ id title description status } }",
            {"id": post["id"]},
        )

        assert result.errors is None
        assert result.data["updatePost"] == {
            "id": post["id"],
            "title": "Hello",
            "description": "First Post!",
            "status": "Completed",
        }

    @pytest.mark.asyncio
    async def test_explicit_null_leaves_field_unchanged(
        self, execute, store: DocumentStore, post: dict[str, Any]
    ) -> None:
        result = await execute(
            'mutation ($id: ID!) { updatePost(id: $id, title: "Renamed", description: null) '
            "{ title description } }",
            {"id": post["id"]},
        )

        assert result.errors is None
        assert result.data["updatePost"] == {"title": "Renamed", "description": "First Post!"}
        stored = await store.posts.find_by_id(post["id"])
        assert stored["creator_id"] == post["creator_id"]

    @pytest.mark.asyncio
    async def test_empty_update_returns_post_unchanged(
        self, execute, post: dict[str, Any]
    ) -> None:
        result = await execute(
            "mutation ($id: ID!) { updatePost(id: $id) { title status } }", {"id": post["id"]}
        )

        assert result.errors is None
        assert result.data["updatePost"] == {"title": "Hello", "status": "Not Started"}

    @pytest.mark.asyncio
    async def test_unknown_id_returns_null(self, execute, store: DocumentStore) -> None:
        result = await execute('mutation { updatePost(id: "missing", title: "x") { id } }')

        assert result.errors is None
        assert result.data == {"updatePost": None}
        assert len(await store.posts.find()) == 0


class TestDeletePost:
    @pytest.mark.asyncio
    async def test_delete_returns_removed_post(
        self, execute, store: DocumentStore, post: dict[str, Any]
    ) -> None:
        result = await execute(
            "mutation ($id: ID!) { deletePost(id: $id) { id title } }", {"id": post["id"]}
        )

        assert result.errors is None
        assert result.data == {"deletePost": {"id": post["id"], "title": "Hello"}}
        assert await store.posts.find_by_id(post["id"]) is None

    @pytest.mark.asyncio
    async def test_repeat_delete_returns_null(self, execute, post: dict[str, Any]) -> None:
        query = "mutation ($id: ID!) { deletePost(id: $id) { id } }"

        await execute(query, {"id": post["id"]})
        result = await execute(query, {"id": post["id"]})

        assert result.errors is None
        assert result.data == {"deletePost": None}

    @pytest.mark.asyncio
    async def test_delete_keeps_creator(
        self, execute, store: DocumentStore, alice: dict[str, Any], post: dict[str, Any]
    ) -> None:
        await execute("mutation ($id: ID!) { deletePost(id: $id) { id } }", {"id": post["id"]})

        assert await store.users.find_by_id(alice["id"]) is not None


class TestStoreFailures:
    @pytest.mark.asyncio
    async def test_failing_root_field_leaves_siblings(
        self, execute, store: DocumentStore, alice: dict[str, Any], post: dict[str, Any]
    ) -> None:
        with patch.object(store.posts, "find", side_effect=StoreError("posts unavailable")):
            result = await execute("{ users { id } posts { id } }")

        assert result.data == {"users": [{"id": alice["id"]}], "posts": None}
        assert len(result.errors) == 1
        assert result.errors[0].path == ["posts"]
        assert result.errors[0].message == "posts unavailable"

    @pytest.mark.asyncio
    async def test_failing_creator_lookup_is_attached_to_node(
        self, execute, store: DocumentStore, post: dict[str, Any]
    ) -> None:
        with patch.object(store.users, "find_by_id", side_effect=StoreError("users unavailable")):
            result = await execute("{ posts { id creator { email } } }")

        assert result.data == {"posts": [{"id": post["id"], "creator": None}]}
        assert result.errors[0].path == ["posts", 0, "creator"]
