"""Asynchronous client -- mirrors :class:`~infinispan_rest.client.sync_client.Infinispan`.

:class:`AsyncInfinispan` wraps :class:`httpx.AsyncClient` and offers the same
single operation, ``await client.run(request)``. Each call is independent, so
many requests may be awaited concurrently on one client::

    async with AsyncInfinispan(url, user, password) as client:
        responses = await asyncio.gather(
            *(client.run(entries.get("users", key)) for key in keys)
        )
"""

from __future__ import annotations

from typing import Optional

import httpx

from infinispan_rest.auth import basic_auth_header, credentials_from_profile
from infinispan_rest.exceptions import ConnectionError_
from infinispan_rest.models import Profile
from infinispan_rest.output import get_output
from infinispan_rest.request.base import RequestBuilder


class AsyncInfinispan:
    """Asynchronous Infinispan REST client.

    Takes the same arguments as
    :class:`~infinispan_rest.client.sync_client.Infinispan`, except that
    ``transport`` must be an :class:`httpx.AsyncBaseTransport`.
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        *,
        timeout: float = 30,
        verify_ssl: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url
        self._authorization = basic_auth_header(username, password)
        self._client = httpx.AsyncClient(timeout=timeout, verify=verify_ssl, transport=transport)

    @classmethod
    def from_profile(
        cls,
        profile: Profile,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> AsyncInfinispan:
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
        return self._authorization

    async def __aenter__(self) -> AsyncInfinispan:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def run(self, request: RequestBuilder) -> httpx.Response:
        """Send *request* and return the response unopened.

        Raises:
            ConnectionError_: If the URL is unusable, the request could not be
                sent, or the response body could not be read.
        """
        try:
            http_request = request.to_http_request(self._base_url, self._authorization)
            response = await self._client.send(http_request)
        except (httpx.InvalidURL, httpx.RequestError) as exc:
            raise ConnectionError_(f"Error while sending the request to Infinispan: {exc}") from exc

        get_output().debug(
            f"{http_request.method} {http_request.url.raw_path.decode('ascii')} "
            f"-> {response.status_code}"
        )
        return response
