"""Exception hierarchy for infinispan-rest.

The library itself raises exactly one error while executing requests,
:class:`ConnectionError_`. HTTP statuses such as 404 or 409 are *not* errors
here: they come back as ordinary responses for the caller to inspect.

All exceptions inherit from :class:`InfinispanError`, which carries an
``exit_code`` from :mod:`infinispan_rest.exit_codes` so that
:func:`infinispan_rest.app.main` can exit with a meaningful code.

Subclass hierarchy::

    InfinispanError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- ConnectionError_    (exit 6)
    +-- ConfigError         (exit 1)
"""

from infinispan_rest.exit_codes import (
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
)


class InfinispanError(Exception):
    """Base exception for all infinispan-rest errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(InfinispanError):
    """Raised for invalid CLI arguments, such as an unusable TTL or an unsafe profile name."""

    exit_code = EXIT_INVALID_USAGE


class ConnectionError_(InfinispanError):
    """Raised when a request could not be built or sent.

    Covers connection refused, DNS failures, timeouts, redirect loops,
    undecodable response bodies and unusable base URLs.
    The original :mod:`httpx` exception is chained as ``__cause__``.

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class ConfigError(InfinispanError):
    """Raised for configuration problems (missing profiles, invalid JSON, bad credential sources)."""

    exit_code = EXIT_GENERIC_FAILURE
