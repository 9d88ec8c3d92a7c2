"""Pydantic models for persisted configuration.

These models are serialised as JSON in the user's config directory by
:mod:`infinispan_rest.config`:

* :class:`GlobalConfig` -- ``config.json``, user-wide defaults.
* :class:`Profile` -- one file per server under ``profiles/``, bundling the
  base URL, credentials (:class:`AuthConfig`) and request settings
  (:class:`RequestConfig`).

Request and topology models live next to the builders in
:mod:`infinispan_rest.request`.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from infinispan_rest.output import OutputFormat


class AuthConfig(BaseModel):
    """HTTP Basic credentials for a :class:`Profile`.

    The password is never stored directly; ``source`` tells
    :func:`~infinispan_rest.config.resolve_credential` where to read it from.

    Example::

        AuthConfig(username="admin", source="env:ISPN_PASSWORD")
    """

    username: str = Field(description="Basic auth username")
    source: str = Field(
        description=(
            "Password source: 'env:VAR', 'file:/path', 'prompt', or 'literal:VALUE'"
        ),
    )


class RequestConfig(BaseModel):
    """HTTP settings handed to the underlying httpx client."""

    timeout: float = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: OutputFormat = Field(
        default=OutputFormat.AUTO, description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/infinispan-rest/config.json``."""

    default_profile: Optional[str] = None
    output: OutputConfig = Field(default_factory=OutputConfig)


class Profile(BaseModel):
    """A stored Infinispan server target.

    See Also:
        :func:`~infinispan_rest.config.load_profile`
        :meth:`~infinispan_rest.client.Infinispan.from_profile`
    """

    name: str
    base_url: str = Field(
        default="http://localhost:11222", description="Server root URL, without /rest"
    )
    auth: Optional[AuthConfig] = None
    request: RequestConfig = Field(default_factory=RequestConfig)
