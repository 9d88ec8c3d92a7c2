"""HTTP Basic authentication.

Infinispan's REST endpoint accepts ``Authorization: Basic <encoded>`` where
``<encoded>`` is the Base64 form of ``"username:password"`` (:rfc:`7617`).
Clients compute the header once at construction time with
:func:`basic_auth_header` and reuse it for every request.
"""

from __future__ import annotations

import base64

from infinispan_rest.config import resolve_credential
from infinispan_rest.exceptions import ConfigError
from infinispan_rest.models import Profile


def basic_auth_header(username: str, password: str) -> str:
    """Return the full ``Authorization`` header value.

    Example::

        >>> basic_auth_header("u", "p")
        'Basic dTpw'
    """
    raw = f"{username}:{password}"
    encoded = base64.b64encode(raw.encode("utf-8")).decode("ascii")
    return f"Basic {encoded}"


def credentials_from_profile(profile: Profile) -> tuple[str, str]:
    """Resolve ``(username, password)`` for *profile*.

    Raises:
        ConfigError: If the profile has no credentials or the password
            source cannot be resolved.
    """
    if profile.auth is None:
        raise ConfigError(
            f"Profile '{profile.name}' has no credentials "
            "(use --username/--password or 'ispn profiles add')"
        )
    return profile.auth.username, resolve_credential(profile.auth.source)
