"""Helpers for reading responses returned by the clients.

The clients never interpret a response. These functions are conveniences for
callers (and the ``ispn`` CLI) that do want to look inside one.
"""

from __future__ import annotations

from typing import Any

import httpx

from infinispan_rest.output import get_output


def extract_response_data(response: httpx.Response) -> Any:
    """Return the body as decoded JSON, raw text, or ``None`` when empty.

    Entry values are stored as opaque strings, so a value that happens to be
    valid JSON is returned decoded.
    """
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def counter_value(response: httpx.Response) -> int:
    """Parse the decimal body of a ``counters.get`` response.

    Raises:
        ValueError: If the body is not an integer.
    """
    return int(response.text.strip())


def name_list(response: httpx.Response) -> list[str]:
    """Parse the JSON array returned by ``caches.list()`` / ``counters.list()``."""
    names = response.json()
    if not isinstance(names, list):
        raise ValueError(f"Expected a JSON array of names, got: {response.text[:200]}")
    return [str(name) for name in names]


def format_api_response(response: httpx.Response) -> None:
    """Print the status line to stderr and the body to stdout."""
    output = get_output()
    output.info(f"HTTP {response.status_code} {response.reason_phrase or ''}".rstrip())

    data = extract_response_data(response)
    if data is not None:
        output.format_response(data)
