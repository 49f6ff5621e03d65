"""Output formatting utilities for CLI commands."""

import json
from typing import Any

import click


def success(message: str) -> None:
    """Print a success message in green."""
    click.secho(f"✓ {message}", fg="green")


def error(message: str) -> None:
    """Print an error message in red."""
    click.secho(f"✗ {message}", fg="red", err=True)


def warning(message: str) -> None:
    """Print a warning message in yellow."""
    click.secho(f"⚠ {message}", fg="yellow")


def info(message: str) -> None:
    """Print an info message in blue."""
    click.secho(f"ℹ {message}", fg="blue")


def header(message: str) -> None:
    """Print a header message in cyan bold."""
    click.secho(f"\n{message}", fg="cyan", bold=True)


def echo_json(payload: Any) -> None:
    """Print a pydantic model (or anything JSON-serializable) as indented JSON."""
    if hasattr(payload, "model_dump"):
        payload = payload.model_dump(mode="json")
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def echo_table(rows: list[dict[str, Any]], columns: list[str]) -> None:
    """Print rows as a left-aligned table with the given column order."""
    widths = {
        column: max([len(column), *(len(_cell(row.get(column))) for row in rows)])
        for column in columns
    }
    click.secho("  ".join(column.ljust(widths[column]) for column in columns), bold=True)
    for row in rows:
        click.echo("  ".join(_cell(row.get(column)).ljust(widths[column]) for column in columns))


def page_footer(has_more: bool, next_cursor: str | None, total_returned: int) -> None:
    """Print page metadata and how to fetch the next page."""
    click.secho(f"\n{total_returned} row(s)", dim=True)
    if has_more and next_cursor:
        info(f"More results: --cursor {next_cursor}")


def _cell(value: Any) -> str:
    if value is None:
        return "-"
    return str(value)
