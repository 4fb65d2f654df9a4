# Schema migrations, applied once at startup

from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from sqlalchemy.engine import Connection
import structlog

from eventboard.core.database import Database
from eventboard.core.errors import MigrationFailed

logger = structlog.get_logger()

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"


def alembic_config(database_url: str | None = None) -> Config:
    """Alembic config pointing at the migration scripts shipped in the package"""
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    if database_url:
        config.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    return config


def _upgrade(connection: Connection, config: Config) -> None:
    config.attributes["connection"] = connection
    command.upgrade(config, "head")


def _current_revision(connection: Connection) -> str | None:
    return MigrationContext.configure(connection).get_current_revision()


async def run_migrations(db: Database) -> None:
    """
    Bring the schema up to the latest revision.

    Applied revisions are recorded in the alembic_version table, so running
    this against an up-to-date database does nothing.

    Raises:
        MigrationFailed: on any error; the service must not start.
    """
    config = alembic_config()

    try:
        async with db.engine.begin() as connection:
            before = await connection.run_sync(_current_revision)
            await connection.run_sync(_upgrade, config)
            after = await connection.run_sync(_current_revision)
    except Exception as e:
        logger.error("migration_failed", error=str(e))
        raise MigrationFailed() from e

    logger.info("migrations_applied", from_revision=before, to_revision=after)


async def current_revision(db: Database) -> str | None:
    """Revision recorded in the migration ledger, None for an empty database"""
    async with db.engine.connect() as connection:
        return await connection.run_sync(_current_revision)
