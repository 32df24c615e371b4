"""
Main FastAPI application for docgate
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import settings
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..store.base import DocumentStore
from ..store.factory import create_document_store

configure_logging(debug=settings.debug, level=settings.log_level)
logger = get_logger(__name__)


def create_app(store: DocumentStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Document store to serve. Built from settings when omitted.
    """
    if store is None:
        store = create_document_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting docgate API...", store=type(store).__name__)
        await store.create_schema()
        logger.info("Document store ready")

        yield

        logger.info("Shutting down docgate API...")
        await store.close()

    app = FastAPI(
        title="docgate API",
        description="GraphQL gateway over a users/posts document store",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.store = store

    app.add_middleware(LoggingContextMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    from ..graphql.schema import create_graphql_router, validate_schema

    logger.info("Validating GraphQL schema...")
    validate_schema()

    app.include_router(create_graphql_router(store), prefix="")
    logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "docgate.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
