"""Numeric process exit codes used by the ``ispn`` command line tool.

Each constant maps to an error category and is referenced by the matching
:class:`~infinispan_rest.exceptions.InfinispanError` subclass, or derived from
the HTTP status of a response by :func:`exit_code_for_status`. Shell scripts
can branch on the exit code without parsing stderr.

Example::

    $ ispn entries get sessions abc
    $ echo $?
    4   # EXIT_NOT_FOUND -- the entry does not exist
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred, or the server answered with a 4xx not covered below."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_AUTH_FAILURE = 3
"""The server rejected the credentials (HTTP 401 / 403)."""

EXIT_NOT_FOUND = 4
"""The requested cache, entry or counter was not found (HTTP 404)."""

EXIT_SERVER_ERROR = 5
"""The server returned an HTTP 5xx error."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""


def exit_code_for_status(status_code: int) -> int:
    """Map an HTTP status code to a process exit code."""
    if status_code < 400:
        return EXIT_SUCCESS
    if status_code in (401, 403):
        return EXIT_AUTH_FAILURE
    if status_code == 404:
        return EXIT_NOT_FOUND
    if status_code >= 500:
        return EXIT_SERVER_ERROR
    return EXIT_GENERIC_FAILURE
