"""HTTP clients for infinispan-rest.

Classes:
    :class:`Infinispan` -- blocking client backed by :class:`httpx.Client`.
    :class:`AsyncInfinispan` -- non-blocking client backed by
    :class:`httpx.AsyncClient`.

Both compute the Basic ``Authorization`` header once, attach it to every
request, and return the raw :class:`httpx.Response`.
"""

from infinispan_rest.client.async_client import AsyncInfinispan
from infinispan_rest.client.sync_client import Infinispan

__all__ = ["Infinispan", "AsyncInfinispan"]
