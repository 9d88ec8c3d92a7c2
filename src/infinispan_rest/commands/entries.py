"""Entry commands -- ``ispn entries ...``."""

from __future__ import annotations

from datetime import timedelta
from typing import Optional

import typer

from infinispan_rest.commands import execute, fail
from infinispan_rest.exceptions import InvalidUsageError
from infinispan_rest.request import entries

entries_app = typer.Typer(no_args_is_help=True)


@entries_app.command("create")
def create_entry(
    ctx: typer.Context,
    cache: str = typer.Argument(help="Cache name."),
    key: str = typer.Argument(help="Entry key."),
    value: Optional[str] = typer.Option(None, "--value", help="Entry value (sent as-is)."),
    ttl: Optional[float] = typer.Option(
        None, "--ttl", help="Time to live in seconds. Fractions are rounded down."
    ),
) -> None:
    """Create an entry, optionally with a value and a time to live.

    Example::

        ispn entries create sessions abc --value '{"user": 1}' --ttl 300
    """
    request = entries.create(cache, key)
    if value is not None:
        request = request.with_value(value)
    if ttl is not None:
        try:
            request = request.with_ttl(timedelta(seconds=ttl))
        except (ValueError, OverflowError) as exc:
            fail(InvalidUsageError(f"Invalid --ttl {ttl}: {exc}"))
    execute(ctx, request)


@entries_app.command("get")
def get_entry(
    ctx: typer.Context,
    cache: str = typer.Argument(help="Cache name."),
    key: str = typer.Argument(help="Entry key."),
) -> None:
    """Print the value of an entry."""
    execute(ctx, entries.get(cache, key))


@entries_app.command("exists")
def entry_exists(
    ctx: typer.Context,
    cache: str = typer.Argument(help="Cache name."),
    key: str = typer.Argument(help="Entry key."),
) -> None:
    """Check whether an entry exists (exit code 4 when it does not)."""
    execute(ctx, entries.exists(cache, key))


@entries_app.command("update")
def update_entry(
    ctx: typer.Context,
    cache: str = typer.Argument(help="Cache name."),
    key: str = typer.Argument(help="Entry key."),
    value: str = typer.Argument(help="New value."),
) -> None:
    """Replace the value of an entry."""
    execute(ctx, entries.update(cache, key, value))


@entries_app.command("delete")
def delete_entry(
    ctx: typer.Context,
    cache: str = typer.Argument(help="Cache name."),
    key: str = typer.Argument(help="Entry key."),
) -> None:
    """Delete an entry."""
    execute(ctx, entries.delete(cache, key))
