"""
CLI commands for Bookshelf database migrations.
"""

import sys
from pathlib import Path

import click
from alembic import command
from alembic.config import Config

from ..config import Settings
from ..logging import get_logger

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"


def get_alembic_config(store_uri: str | None = None) -> Config:
    """Build an Alembic configuration pointing at the packaged migrations."""
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    config.set_main_option("sqlalchemy.url", store_uri or Settings().store_uri)
    return config


@click.group()
@click.option("--store-uri", envvar="STORE_URI", default=None, help="Store URI (default: $STORE_URI)")
@click.pass_context
def db(ctx: click.Context, store_uri: str | None) -> None:
    """Database migration management."""
    ctx.obj = get_alembic_config(store_uri)


@db.command()
@click.argument("revision", default="head")
@click.pass_obj
def upgrade(config: Config, revision: str) -> None:
    """Upgrade database to a revision (default: head)."""
    try:
        logger.info("Upgrading database", revision=revision)
        command.upgrade(config, revision)
        logger.info("Database upgrade completed successfully")
    except Exception as e:
        logger.error("Database upgrade failed", error=str(e))
        sys.exit(1)


@db.command()
@click.argument("revision", default="-1")
@click.pass_obj
def downgrade(config: Config, revision: str) -> None:
    """Downgrade database to a revision (default: -1)."""
    try:
        logger.info("Downgrading database", revision=revision)
        command.downgrade(config, revision)
        logger.info("Database downgrade completed successfully")
    except Exception as e:
        logger.error("Database downgrade failed", error=str(e))
        sys.exit(1)


@db.command()
@click.pass_obj
def current(config: Config) -> None:
    """Show current database revision."""
    try:
        command.current(config)
    except Exception as e:
        logger.error("Failed to get current revision", error=str(e))
        sys.exit(1)


@db.command()
@click.pass_obj
def history(config: Config) -> None:
    """Show migration history."""
    try:
        command.history(config)
    except Exception as e:
        logger.error("Failed to get migration history", error=str(e))
        sys.exit(1)
