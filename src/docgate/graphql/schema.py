"""
Main GraphQL schema definition using Strawberry
"""

from typing import Any

import strawberry
from fastapi import Request
from graphql import get_introspection_query, graphql_sync
from graphql import validate_schema as gql_validate_schema
from strawberry.fastapi import GraphQLRouter

from ..config import settings
from ..logging import get_logger
from ..store.base import DocumentStore
from .mutations.root import Mutation
from .queries.root import Query

logger = get_logger(__name__)


class SchemaValidationError(Exception):
    """Raised when the composed schema fails validation at startup."""

    pass


schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
)


def validate_schema() -> None:
    """Validate the GraphQL schema at startup.

    Runs graphql-core's structural validation followed by an introspection
    query, so unresolved type references fail the server at boot.

    Raises:
        SchemaValidationError: If the schema is invalid
    """
    graphql_schema = schema._schema

    errors = gql_validate_schema(graphql_schema)
    if errors:
        message = "; ".join(str(e) for e in errors)
        logger.error("GraphQL schema validation failed", error=message)
        raise SchemaValidationError(f"GraphQL schema validation failed: {message}")

    result = graphql_sync(graphql_schema, get_introspection_query())
    if result.errors:
        message = "; ".join(str(e) for e in result.errors)
        logger.error("GraphQL introspection failed", error=message)
        raise SchemaValidationError(f"GraphQL introspection failed: {message}")

    logger.info("GraphQL schema validation successful")


def create_graphql_router(store: DocumentStore) -> GraphQLRouter[dict[str, Any], None]:
    """Create a GraphQL router for FastAPI bound to ``store``."""

    async def get_context(request: Request) -> dict[str, Any]:
        """Get the context for GraphQL resolvers."""
        return {
            "request": request,
            "store": store,
        }

    serve_ide = settings.graphiql and settings.environment.lower() == "development"

    return GraphQLRouter(
        schema,
        path="/graphql",
        graphql_ide="graphiql" if serve_ide else None,
        context_getter=get_context,
    )
