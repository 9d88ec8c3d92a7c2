"""Counter commands -- ``ispn counters ...``.

Example::

    ispn counters create hits --strong --value 100
    ispn counters increment hits --by 5
    ispn counters compare-and-set hits 105 0
"""

from __future__ import annotations

from typing import Optional

import typer

from infinispan_rest.commands import execute
from infinispan_rest.request import counters

counters_app = typer.Typer(no_args_is_help=True)


@counters_app.command("create")
def create_counter(
    ctx: typer.Context,
    name: str = typer.Argument(help="Counter name."),
    strong: bool = typer.Option(False, "--strong", help="Create a strong counter instead of a weak one."),
    value: Optional[int] = typer.Option(None, "--value", help="Initial value."),
) -> None:
    """Create a weak (default) or strong counter."""
    request = counters.create_strong(name) if strong else counters.create_weak(name)
    if value is not None:
        request = request.with_value(value)
    execute(ctx, request)


@counters_app.command("get")
def get_counter(ctx: typer.Context, name: str = typer.Argument(help="Counter name.")) -> None:
    """Print the current value of a counter."""
    execute(ctx, counters.get(name))


@counters_app.command("config")
def counter_config(ctx: typer.Context, name: str = typer.Argument(help="Counter name.")) -> None:
    """Show the configuration of a counter."""
    execute(ctx, counters.get_config(name))


@counters_app.command("increment")
def increment_counter(
    ctx: typer.Context,
    name: str = typer.Argument(help="Counter name."),
    by: Optional[int] = typer.Option(None, "--by", help="Add this delta instead of 1."),
) -> None:
    """Increment a counter by one, or by ``--by``."""
    request = counters.increment(name)
    if by is not None:
        request = request.by(by)
    execute(ctx, request)


@counters_app.command("decrement")
def decrement_counter(ctx: typer.Context, name: str = typer.Argument(help="Counter name.")) -> None:
    """Decrement a counter by one."""
    execute(ctx, counters.decrement(name))


@counters_app.command("reset")
def reset_counter(ctx: typer.Context, name: str = typer.Argument(help="Counter name.")) -> None:
    """Reset a counter to its initial value."""
    execute(ctx, counters.reset(name))


@counters_app.command("delete")
def delete_counter(ctx: typer.Context, name: str = typer.Argument(help="Counter name.")) -> None:
    """Delete a counter."""
    execute(ctx, counters.delete(name))


@counters_app.command("compare-and-set")
def compare_and_set(
    ctx: typer.Context,
    name: str = typer.Argument(help="Counter name."),
    expect: int = typer.Argument(help="Expected current value."),
    update: int = typer.Argument(help="New value."),
) -> None:
    """Set a strong counter to UPDATE if it currently equals EXPECT."""
    execute(ctx, counters.compare_and_set(name, expect, update))


@counters_app.command("compare-and-swap")
def compare_and_swap(
    ctx: typer.Context,
    name: str = typer.Argument(help="Counter name."),
    expect: int = typer.Argument(help="Expected current value."),
    update: int = typer.Argument(help="New value."),
) -> None:
    """Like compare-and-set, but prints the previous value."""
    execute(ctx, counters.compare_and_swap(name, expect, update))


@counters_app.command("list")
def list_counters(ctx: typer.Context) -> None:
    """List counter names."""
    execute(ctx, counters.list())
