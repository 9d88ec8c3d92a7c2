"""Cache commands -- ``ispn caches ...``.

Thin wrappers over :mod:`infinispan_rest.request.caches`::

    ispn caches create orders --mode distributed-sync
    ispn caches size orders
    ispn caches list --json
"""

from __future__ import annotations

import enum
from typing import Callable

import typer

from infinispan_rest.commands import execute
from infinispan_rest.request import caches
from infinispan_rest.request.base import Request

caches_app = typer.Typer(no_args_is_help=True)


class Topology(str, enum.Enum):
    LOCAL = "local"
    REPLICATED_SYNC = "replicated-sync"
    REPLICATED_ASYNC = "replicated-async"
    DISTRIBUTED_SYNC = "distributed-sync"
    DISTRIBUTED_ASYNC = "distributed-async"
    INVALIDATION_SYNC = "invalidation-sync"
    INVALIDATION_ASYNC = "invalidation-async"


_CREATORS: dict[Topology, Callable[[str], Request]] = {
    Topology.LOCAL: caches.create_local,
    Topology.REPLICATED_SYNC: caches.create_replicated_sync,
    Topology.REPLICATED_ASYNC: caches.create_replicated_async,
    Topology.DISTRIBUTED_SYNC: caches.create_distributed_sync,
    Topology.DISTRIBUTED_ASYNC: caches.create_distributed_async,
    Topology.INVALIDATION_SYNC: caches.create_invalidation_sync,
    Topology.INVALIDATION_ASYNC: caches.create_invalidation_async,
}


@caches_app.command("create")
def create_cache(
    ctx: typer.Context,
    name: str = typer.Argument(help="Cache name."),
    mode: Topology = typer.Option(Topology.LOCAL, "--mode", "-m", help="Cache topology."),
) -> None:
    """Create a cache with the default configuration of a topology."""
    execute(ctx, _CREATORS[mode](name))


@caches_app.command("exists")
def cache_exists(ctx: typer.Context, name: str = typer.Argument(help="Cache name.")) -> None:
    """Check whether a cache exists (exit code 4 when it does not)."""
    execute(ctx, caches.exists(name))


@caches_app.command("get")
def get_cache(ctx: typer.Context, name: str = typer.Argument(help="Cache name.")) -> None:
    """Show a cache."""
    execute(ctx, caches.get(name))


@caches_app.command("config")
def cache_config(ctx: typer.Context, name: str = typer.Argument(help="Cache name.")) -> None:
    """Show the configuration of a cache."""
    execute(ctx, caches.get_config(name))


@caches_app.command("delete")
def delete_cache(ctx: typer.Context, name: str = typer.Argument(help="Cache name.")) -> None:
    """Delete a cache and all of its entries."""
    execute(ctx, caches.delete(name))


@caches_app.command("keys")
def cache_keys(ctx: typer.Context, name: str = typer.Argument(help="Cache name.")) -> None:
    """List the keys stored in a cache."""
    execute(ctx, caches.keys(name))


@caches_app.command("clear")
def clear_cache(ctx: typer.Context, name: str = typer.Argument(help="Cache name.")) -> None:
    """Remove every entry from a cache."""
    execute(ctx, caches.clear(name))


@caches_app.command("size")
def cache_size(ctx: typer.Context, name: str = typer.Argument(help="Cache name.")) -> None:
    """Show the number of entries in a cache."""
    execute(ctx, caches.size(name))


@caches_app.command("stats")
def cache_stats(ctx: typer.Context, name: str = typer.Argument(help="Cache name.")) -> None:
    """Show cache statistics."""
    execute(ctx, caches.stats(name))


@caches_app.command("list")
def list_caches(ctx: typer.Context) -> None:
    """List cache names."""
    execute(ctx, caches.list())
