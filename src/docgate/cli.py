#!/usr/bin/env python3
"""
Main CLI entry point for the docgate server.
"""

import asyncio
import os
import sys

import click
import uvicorn

from docgate import __version__
from docgate.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="docgate")
def cli() -> None:
    """docgate CLI - run the GraphQL server and prepare its document store."""
    pass


@cli.command()
@click.option(
    "--host",
    default=None,
    help="Host to bind to (default: DOCGATE_API_HOST setting)",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Port to bind to (default: DOCGATE_API_PORT setting)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str | None, port: int | None, reload: bool, log_level: str) -> None:
    """Start the docgate API server."""
    from docgate.config import settings

    host = host or settings.api_host
    port = port if port is not None else settings.api_port
    reload = reload or settings.api_reload
    configure_logging(debug=(log_level == "debug"))

    logger.info(
        "Starting docgate API server",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )

    # Settings are read at import time of the app module
    if log_level == "debug":
        os.environ["DOCGATE_DEBUG"] = "true"
        os.environ["DOCGATE_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("DOCGATE_DEBUG", "false")
        os.environ.setdefault("DOCGATE_LOG_LEVEL", log_level)

    try:
        uvicorn.run(
            "docgate.api.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command("init-db")
@click.option(
    "--database-url",
    default=None,
    help="Database URL (default: DOCGATE_DATABASE_URL setting)",
)
def init_db(database_url: str | None) -> None:
    """Create the documents table used by the SQL store backend."""
    from docgate.config import settings
    from docgate.store.base import StoreError
    from docgate.store.implementations.sql import SqlDocumentStore

    configure_logging(debug=settings.debug)
    store = SqlDocumentStore(database_url or settings.database_url, echo=settings.sql_echo)

    async def do_init() -> None:
        try:
            await store.create_schema()
        finally:
            await store.close()

    try:
        asyncio.run(do_init())
    except StoreError as e:
        logger.error("Failed to initialize document store", error=str(e))
        click.echo(f"✗ Error initializing document store: {e}", err=True)
        sys.exit(1)

    click.echo("✓ Document store initialized")


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
