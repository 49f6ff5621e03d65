"""Programmatic Alembic command interface with async support.

Runs the migrations under ``alembic/`` without a subprocess. Alembic's
commands are synchronous and ``env.py`` starts its own event loop, so every
command runs in a worker thread.

Example:
    from leaderboard_service.infra.database.alembic import get_alembic_commands

    commands = get_alembic_commands()
    await commands.upgrade("head")

    if not await commands.is_up_to_date():
        ...
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import io
import logging
from pathlib import Path

from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import command

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[3]


@dataclass
class AlembicCommandConfig:
    """Configuration for Alembic commands.

    Attributes:
        url: SQLAlchemy async URL of the database to migrate
        script_location: Path to the alembic scripts directory
        render_as_batch: Force batch mode (always on for SQLite)
    """

    url: str
    script_location: str = str(PROJECT_ROOT / "alembic")
    render_as_batch: bool = False

    def get_alembic_config(self, output_buffer: io.StringIO | None = None) -> Config:
        """Build an Alembic Config; ``alembic.ini`` is used when present."""
        ini_path = PROJECT_ROOT / "alembic.ini"
        config = Config(
            str(ini_path) if ini_path.exists() else None,
            stdout=output_buffer or io.StringIO(),
        )
        config.set_main_option("script_location", self.script_location)
        # '%' must be escaped for ConfigParser interpolation
        config.set_main_option("sqlalchemy.url", self.url.replace("%", "%%"))

        # Read by env.py through config.attributes
        config.attributes["render_as_batch"] = self.render_as_batch
        config.attributes["configure_logging"] = False
        return config


class AlembicCommands:
    """Programmatic interface for Alembic migration operations.

    Example:
        commands = AlembicCommands(AlembicCommandConfig(url="sqlite+aiosqlite:///./leaderboard.db"))
        await commands.upgrade()
        revision = await commands.get_current_revision()
    """

    def __init__(self, config: AlembicCommandConfig) -> None:
        self.config = config

    # =========================================================================
    # Migration Commands
    # =========================================================================

    async def upgrade(self, revision: str = "head", *, sql: bool = False) -> str:
        """Upgrade database to a specified revision.

        Args:
            revision: Target revision (default: "head" for latest)
            sql: If True, output SQL without executing

        Returns:
            Output from the upgrade operation
        """
        logger.info("Upgrading database", extra={"revision": revision, "operation": "db.upgrade"})
        output = io.StringIO()
        alembic_config = self.config.get_alembic_config(output)

        def _run() -> None:
            command.upgrade(alembic_config, revision, sql=sql)

        await asyncio.to_thread(_run)
        logger.info("Upgrade completed", extra={"revision": revision, "operation": "db.upgrade"})
        return output.getvalue()

    async def downgrade(self, revision: str = "-1", *, sql: bool = False) -> str:
        """Downgrade database to a specified revision ("-1" steps back once, "base" drops all)."""
        logger.warning("Downgrading database", extra={"revision": revision, "operation": "db.downgrade"})
        output = io.StringIO()
        alembic_config = self.config.get_alembic_config(output)

        def _run() -> None:
            command.downgrade(alembic_config, revision, sql=sql)

        await asyncio.to_thread(_run)
        logger.info("Downgrade completed", extra={"revision": revision, "operation": "db.downgrade"})
        return output.getvalue()

    async def current(self, *, verbose: bool = False) -> str:
        """Output of ``alembic current``."""
        output = io.StringIO()
        alembic_config = self.config.get_alembic_config(output)

        def _run() -> None:
            command.current(alembic_config, verbose=verbose)

        await asyncio.to_thread(_run)
        return output.getvalue()

    # =========================================================================
    # Utility Methods
    # =========================================================================

    async def get_current_revision(self) -> str | None:
        """Current revision hash, or None if no migrations are applied."""
        engine = create_async_engine(self.config.url, poolclass=pool.NullPool)
        try:
            async with engine.connect() as conn:
                return await conn.run_sync(
                    lambda sync_conn: MigrationContext.configure(sync_conn).get_current_revision()
                )
        finally:
            await engine.dispose()

    async def get_head_revision(self) -> str | None:
        """Head revision hash, or None if no migrations exist."""

        def _get() -> str | None:
            script = ScriptDirectory.from_config(self.config.get_alembic_config())
            return script.get_current_head()

        return await asyncio.to_thread(_get)

    async def is_up_to_date(self) -> bool:
        """Whether the database is at the head revision."""
        current = await self.get_current_revision()
        head = await self.get_head_revision()
        return current == head


def get_alembic_commands(url: str | None = None, *, render_as_batch: bool = False) -> AlembicCommands:
    """Factory for AlembicCommands; the URL defaults to ``DatabaseSettings.url``."""
    if url is None:
        from leaderboard_service.core.settings import get_db_settings

        url = get_db_settings().url

    return AlembicCommands(AlembicCommandConfig(url=url, render_as_batch=render_as_batch))


__all__ = [
    "AlembicCommandConfig",
    "AlembicCommands",
    "get_alembic_commands",
]
