"""Database management commands using the programmatic Alembic API.

Example:bash
    # Apply all pending migrations
    leaderboard db upgrade

    # Check migration status
    leaderboard db current

    # Rollback last migration
    leaderboard db downgrade
"""

import sys

import click
from sqlalchemy.exc import SQLAlchemyError

from leaderboard_service.cli.utils import coro, error, info, success, warning
from leaderboard_service.core.settings import get_db_settings


def get_alembic_commands():
    """Get AlembicCommands instance with lazy import."""
    from leaderboard_service.infra.database.alembic import get_alembic_commands

    return get_alembic_commands()


@click.group(name="db")
def db() -> None:
    """Database management commands."""


@db.command()
@click.option(
    "--create-schema/--no-create-schema",
    default=None,
    help="Create tables and triggers without Alembic (default: DB_CREATE_SCHEMA)",
)
@coro
async def init(create_schema: bool | None) -> None:
    """Verify connectivity, optionally creating the schema."""
    from sqlalchemy.engine import make_url

    from leaderboard_service.infra.database import init_database

    url = make_url(get_db_settings().url).render_as_string(hide_password=True)
    info(f"Connecting to: {url}")

    try:
        await init_database(create_schema=create_schema)
    except SQLAlchemyError as e:
        error(f"Failed to connect to database: {e}")
        sys.exit(1)

    success("Database connected successfully!")


@db.command()
@click.option("--revision", default="head", help="Target revision (default: head)")
@click.option("--sql/--no-sql", default=False, help="Output SQL without executing")
@coro
async def upgrade(revision: str, sql: bool) -> None:
    """Apply database migrations."""
    info(f"Upgrading database to: {revision}")

    try:
        output = await get_alembic_commands().upgrade(revision, sql=sql)
    except Exception as e:
        error(f"Failed to upgrade database: {e}")
        sys.exit(1)

    if output:
        click.echo(output)
    if not sql:
        success("Database upgraded successfully!")


@db.command()
@click.option("--steps", default=1, type=int, help="Number of migrations to rollback (0 = all)")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@coro
async def downgrade(steps: int, yes: bool) -> None:
    """Rollback database migrations."""
    warning(f"Rolling back {steps or 'all'} migration(s)...")
    if not yes and not click.confirm("Are you sure you want to rollback migrations?"):
        info("Rollback cancelled")
        return

    target = f"-{steps}" if steps > 0 else "base"
    try:
        output = await get_alembic_commands().downgrade(target)
    except Exception as e:
        error(f"Failed to downgrade database: {e}")
        sys.exit(1)

    if output:
        click.echo(output)
    success("Database downgraded successfully!")


@db.command()
@coro
async def current() -> None:
    """Show current database revision and whether it is at head."""
    try:
        commands = get_alembic_commands()
        revision = await commands.get_current_revision()
        up_to_date = await commands.is_up_to_date()
    except Exception as e:
        error(f"Failed to get current revision: {e}")
        sys.exit(1)

    click.echo(f"  Current:      {revision or '(none)'}")
    click.echo(f"  Up to date:   {'Yes' if up_to_date else 'No'}")
