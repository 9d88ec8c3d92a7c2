"""Requests for the cache collection endpoint ``/rest/v2/caches``.

Example::

    from infinispan_rest.request import caches

    client.run(caches.create_distributed_sync("orders"))
    client.run(caches.size("orders"))
"""

from __future__ import annotations

from typing import Optional

from infinispan_rest.request.actions import CacheAction
from infinispan_rest.request.base import CACHES_ENDPOINT, HTTPMethod, Request, encode_name
from infinispan_rest.request.modes import (
    CacheConfig,
    DistributedCache,
    InvalidationCache,
    LocalCache,
    ReplicatedCache,
)


def create(name: str, config: CacheConfig) -> Request:
    """Create a cache with an explicit topology configuration."""
    return Request(method=HTTPMethod.POST, path_and_query=cache_path(name), body=config.to_json())


def create_local(name: str) -> Request:
    return create(name, LocalCache())


def create_replicated_async(name: str) -> Request:
    return create(name, ReplicatedCache.create_async())


def create_replicated_sync(name: str) -> Request:
    return create(name, ReplicatedCache.create_sync())


def create_distributed_async(name: str) -> Request:
    return create(name, DistributedCache.create_async())


def create_distributed_sync(name: str) -> Request:
    return create(name, DistributedCache.create_sync())


def create_invalidation_async(name: str) -> Request:
    return create(name, InvalidationCache.create_async())


def create_invalidation_sync(name: str) -> Request:
    return create(name, InvalidationCache.create_sync())


def exists(name: str) -> Request:
    return Request(method=HTTPMethod.HEAD, path_and_query=cache_path(name))


def get(name: str) -> Request:
    return Request(method=HTTPMethod.GET, path_and_query=cache_path(name))


def get_config(name: str) -> Request:
    return Request(method=HTTPMethod.GET, path_and_query=cache_path(name, CacheAction.CONFIG))


def delete(name: str) -> Request:
    return Request(method=HTTPMethod.DELETE, path_and_query=cache_path(name))


def keys(name: str) -> Request:
    return Request(method=HTTPMethod.GET, path_and_query=cache_path(name, CacheAction.KEYS))


def clear(name: str) -> Request:
    return Request(method=HTTPMethod.POST, path_and_query=cache_path(name, CacheAction.CLEAR))


def size(name: str) -> Request:
    return Request(method=HTTPMethod.GET, path_and_query=cache_path(name, CacheAction.SIZE))


def stats(name: str) -> Request:
    return Request(method=HTTPMethod.GET, path_and_query=cache_path(name, CacheAction.STATS))


def list() -> Request:  # noqa: A001
    return Request(method=HTTPMethod.GET, path_and_query=CACHES_ENDPOINT)


def cache_path(name: str, action: Optional[CacheAction] = None) -> str:
    """Return ``/rest/v2/caches/{name}`` with an optional action query."""
    path = f"{CACHES_ENDPOINT}/{encode_name(name)}"
    if action is None:
        return path
    return f"{path}?{action.to_action().to_query()}"
