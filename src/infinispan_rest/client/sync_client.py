"""Blocking client for the Infinispan REST API.

:class:`Infinispan` holds three immutable pieces of state: the server base
URL, an :class:`httpx.Client` connection pool, and the precomputed Basic
``Authorization`` header. :meth:`Infinispan.run` materialises any request
builder, sends it, and hands back the raw :class:`httpx.Response`.

Status codes are never interpreted here. A 404 for a missing cache is a
normal return value; only network-level failures raise
:class:`~infinispan_rest.exceptions.ConnectionError_`. There is no retry.

See Also:
    :class:`~infinispan_rest.client.async_client.AsyncInfinispan` for the
    non-blocking equivalent.
"""

from __future__ import annotations

from typing import Optional

import httpx

from infinispan_rest.auth import basic_auth_header, credentials_from_profile
from infinispan_rest.exceptions import ConnectionError_
from infinispan_rest.models import Profile
from infinispan_rest.output import get_output
from infinispan_rest.request.base import RequestBuilder


class Infinispan:
    """Synchronous Infinispan REST client.

    Args:
        base_url: Server root such as ``http://localhost:11222``. Request
            paths (``/rest/v2/...``) are appended verbatim.
        username: Basic auth username.
        password: Basic auth password.
        timeout: Per-request timeout in seconds, passed to httpx.
        verify_ssl: Verify TLS certificates.
        transport: Optional httpx transport, e.g. :class:`httpx.MockTransport`
            in tests.

    Example::

        from infinispan_rest import Infinispan
        from infinispan_rest.request import caches

        with Infinispan("http://localhost:11222", "admin", "secret") as client:
            resp = client.run(caches.exists("users"))
            print(resp.status_code)
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        *,
        timeout: float = 30,
        verify_ssl: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._base_url = base_url
        self._authorization = basic_auth_header(username, password)
        self._client = httpx.Client(timeout=timeout, verify=verify_ssl, transport=transport)

    @classmethod
    def from_profile(
        cls,
        profile: Profile,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> Infinispan:
        """Build a client from a stored or resolved profile.

        Raises:
            ConfigError: If the profile lacks credentials.
        """
        username, password = credentials_from_profile(profile)
        return cls(
            profile.base_url,
            username,
            password,
            timeout=profile.request.timeout,
            verify_ssl=profile.request.verify_ssl,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def authorization(self) -> str:
        """The ``Authorization`` header value sent with every request."""
        return self._authorization

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> Infinispan:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # ------------------------------------------------------------------ #
    # Execution
    # ------------------------------------------------------------------ #

    def run(self, request: RequestBuilder) -> httpx.Response:
        """Send *request* and return the server's response, whatever its status.

        Args:
            request: A :class:`~infinispan_rest.request.base.Request` or any
                builder such as ``counters.increment("c").by(2)``.

        Returns:
            The :class:`httpx.Response`, with the body already read.

        Raises:
            ConnectionError_: If the URL is unusable, the request could not be
                sent, or the response body could not be read (connection
                refused, timeout, undecodable content).
        """
        try:
            http_request = request.to_http_request(self._base_url, self._authorization)
            response = self._client.send(http_request)
        except (httpx.InvalidURL, httpx.RequestError) as exc:
            raise ConnectionError_(f"Error while sending the request to Infinispan: {exc}") from exc

        get_output().debug(
            f"{http_request.method} {http_request.url.raw_path.decode('ascii')} "
            f"-> {response.status_code}"
        )
        return response
