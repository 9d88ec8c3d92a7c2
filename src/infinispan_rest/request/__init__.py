"""Request builders for the Infinispan REST API.

Resources are split into three modules, each exposing plain functions that
return a :class:`~infinispan_rest.request.base.Request` or a chainable
builder:

- :mod:`infinispan_rest.request.caches` -- cache lifecycle and actions.
- :mod:`infinispan_rest.request.counters` -- weak/strong counters.
- :mod:`infinispan_rest.request.entries` -- entries with optional TTL.

Example::

    from infinispan_rest.request import caches, entries

    client.run(caches.create_local("users"))
    client.run(entries.create("users", "42").with_value("alice"))
"""

from infinispan_rest.request import caches, counters, entries
from infinispan_rest.request.base import HTTPMethod, Request, RequestBuilder

__all__ = ["HTTPMethod", "Request", "RequestBuilder", "caches", "counters", "entries"]
