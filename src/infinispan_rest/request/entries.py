"""Requests for cache entries at ``/rest/v2/caches/{cache}/{entry}``."""

from __future__ import annotations

from datetime import timedelta
from typing import Optional

from infinispan_rest.request.base import (
    CACHES_ENDPOINT,
    HTTPMethod,
    Request,
    RequestBuilder,
    encode_name,
)

TTL_HEADER = "timeToLiveSeconds"


class CreateEntryRequest(RequestBuilder):
    """POST a new entry, optionally with a value and a time-to-live.

    The TTL is sent in whole seconds, rounded down.

    Example::

        entries.create("sessions", "abc").with_value("{}").with_ttl(timedelta(minutes=5))
    """

    cache_name: str
    entry_name: str
    value: Optional[str] = None
    ttl: Optional[timedelta] = None

    def with_value(self, value: str) -> CreateEntryRequest:
        return self.model_copy(update={"value": value})

    def with_ttl(self, ttl: timedelta) -> CreateEntryRequest:
        if ttl < timedelta(0):
            raise ValueError(f"TTL must not be negative, got {ttl}")
        return self.model_copy(update={"ttl": ttl})

    def to_request(self) -> Request:
        headers: dict[str, str] = {}
        if self.ttl is not None:
            headers[TTL_HEADER] = str(self.ttl // timedelta(seconds=1))

        return Request(
            method=HTTPMethod.POST,
            path_and_query=entry_path(self.cache_name, self.entry_name),
            headers=headers,
            body=self.value,
        )


def create(cache_name: str, entry_name: str) -> CreateEntryRequest:
    return CreateEntryRequest(cache_name=cache_name, entry_name=entry_name)


def get(cache_name: str, entry_name: str) -> Request:
    return Request(method=HTTPMethod.GET, path_and_query=entry_path(cache_name, entry_name))


def exists(cache_name: str, entry_name: str) -> Request:
    return Request(method=HTTPMethod.HEAD, path_and_query=entry_path(cache_name, entry_name))


def update(cache_name: str, entry_name: str, value: str) -> Request:
    return Request(
        method=HTTPMethod.PUT,
        path_and_query=entry_path(cache_name, entry_name),
        body=value,
    )


def delete(cache_name: str, entry_name: str) -> Request:
    return Request(method=HTTPMethod.DELETE, path_and_query=entry_path(cache_name, entry_name))


def entry_path(cache_name: str, entry_name: str) -> str:
    return f"{CACHES_ENDPOINT}/{encode_name(cache_name)}/{encode_name(entry_name)}"
