#!/usr/bin/env python3
"""
Main CLI entry point for the Bookshelf server.
"""

import click
import uvicorn

from . import __version__
from .config import Settings
from .database.cli import db
from .logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="bookshelf")
def cli() -> None:
    """Bookshelf CLI - run the server and manage the database."""
    configure_logging(debug=False)


@cli.command()
@click.option("--host", default=None, help="Host to bind to (default: $HOST or 0.0.0.0)")
@click.option("--port", default=None, type=int, help="Port to bind to (default: $PORT or 4000)")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str | None, port: int | None, reload: bool, log_level: str) -> None:
    """Start the GraphQL API server."""
    settings = Settings()
    host = host or settings.host
    port = port or settings.port

    logger.info("Starting Bookshelf server", host=host, port=port, reload=reload)

    # Factory mode: the app builds its own Settings inside the worker process
    uvicorn.run(
        "bookshelf.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload or settings.reload,
        log_level=log_level,
    )


cli.add_command(db)


if __name__ == "__main__":
    cli()
