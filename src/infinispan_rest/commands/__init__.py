"""Sub-command groups of the ``ispn`` command line tool.

Every resource command builds a request with :mod:`infinispan_rest.request`
and hands it to :func:`execute`, which resolves the connection profile from
the root options stored in ``ctx.obj``, runs the request, prints the
response, and exits with a code derived from the HTTP status.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from infinispan_rest.client import Infinispan
from infinispan_rest.client.response import format_api_response
from infinispan_rest.config import resolve_profile
from infinispan_rest.exceptions import InfinispanError
from infinispan_rest.exit_codes import EXIT_SUCCESS, exit_code_for_status
from infinispan_rest.models import Profile
from infinispan_rest.output import error
from infinispan_rest.request.base import RequestBuilder


def fail(exc: InfinispanError) -> NoReturn:
    """Report *exc* on stderr and exit with its code."""
    error(str(exc))
    raise typer.Exit(code=exc.exit_code)


def create_client(profile: Profile) -> Infinispan:
    """Build the client used by CLI commands. Patched in tests."""
    return Infinispan.from_profile(profile)


def execute(ctx: typer.Context, request: RequestBuilder) -> None:
    """Run *request* against the resolved server and render the response.

    Raises:
        typer.Exit: With the exit code for the response status, or for the
            :class:`~infinispan_rest.exceptions.InfinispanError` raised while
            resolving the profile or sending the request.
    """
    obj = ctx.obj or {}
    try:
        profile = resolve_profile(
            cli_profile=obj.get("profile"),
            cli_base_url=obj.get("url"),
            cli_username=obj.get("username"),
            cli_password=obj.get("password"),
        )
        with create_client(profile) as client:
            response = client.run(request)
    except InfinispanError as exc:
        fail(exc)

    format_api_response(response)

    code = exit_code_for_status(response.status_code)
    if code != EXIT_SUCCESS:
        raise typer.Exit(code=code)
