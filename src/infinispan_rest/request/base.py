"""Transport-agnostic request value type and the builder base class.

Every request builder in :mod:`infinispan_rest.request` ends up as a
:class:`Request`: an HTTP method, an already percent-encoded path (with any
``?action=...`` query string), extra headers, and an optional string body.

:meth:`RequestBuilder.to_http_request` is the single place where a request is
turned into a wire-level :class:`httpx.Request`. It always sets
``Content-Type: application/json`` and the precomputed ``Authorization``
header, then layers the request-specific headers on top.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import Optional
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ConfigDict, Field

REST_PREFIX = "/rest/v2"
CACHES_ENDPOINT = f"{REST_PREFIX}/caches"
COUNTERS_ENDPOINT = f"{REST_PREFIX}/counters"

CONTENT_TYPE = "application/json"


class HTTPMethod(str, enum.Enum):
    """HTTP methods used by the REST endpoints."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


def encode_name(name: str) -> str:
    """Percent-encode a resource name for use as a single path segment.

    Only unreserved characters (letters, digits, ``-``, ``_``, ``.``, ``~``)
    are left as-is, so ``/`` inside a name never splits the path.
    """
    return quote(name, safe="")


class RequestBuilder(BaseModel, ABC):
    """Base class for everything that can be sent by a client.

    Subclasses only need to implement :meth:`to_request`; materialisation to
    an :class:`httpx.Request` is shared.
    """

    model_config = ConfigDict(frozen=True)

    @abstractmethod
    def to_request(self) -> Request:
        """Return the plain :class:`Request` this builder describes."""
        ...

    def to_http_request(self, base_url: str, authorization: str) -> httpx.Request:
        """Build the wire-level request.

        Args:
            base_url: Server root, e.g. ``http://localhost:11222``. It is
                concatenated with the path verbatim.
            authorization: Full ``Authorization`` header value
                (``"Basic ..."``).

        Returns:
            An :class:`httpx.Request` ready to be sent by any httpx client.

        Raises:
            httpx.InvalidURL: If ``base_url`` cannot be parsed.
        """
        request = self.to_request()

        headers = httpx.Headers(
            {"Content-Type": CONTENT_TYPE, "Authorization": authorization}
        )
        headers.update(request.headers)

        return httpx.Request(
            method=request.method.value,
            url=f"{base_url}{request.path_and_query}",
            headers=headers,
            content=request.body if request.body is not None else "",
        )


class Request(RequestBuilder):
    """A fully described REST call.

    Example::

        Request(method=HTTPMethod.GET, path_and_query="/rest/v2/caches")
    """

    method: HTTPMethod
    path_and_query: str
    headers: dict[str, str] = Field(default_factory=dict)
    body: Optional[str] = None

    def to_request(self) -> Request:
        return self
