"""Typer application and entry point for the ``ispn`` command line tool.

The root callback turns the global options into an
:class:`~infinispan_rest.output.OutputManager` and stores the connection
overrides (``--profile``, ``--url``, ``--username``, ``--password``) in
``ctx.obj`` for :func:`infinispan_rest.commands.execute`.

:func:`main` is the console-script entry point declared in
``pyproject.toml``. Unhandled exceptions are written to a crash log under the
data directory.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from infinispan_rest import __version__
from infinispan_rest.commands.caches import caches_app
from infinispan_rest.commands.counters import counters_app
from infinispan_rest.commands.entries import entries_app
from infinispan_rest.commands.profiles import profiles_app
from infinispan_rest.exit_codes import EXIT_GENERIC_FAILURE

app = typer.Typer(
    name="ispn",
    help="Manage Infinispan caches, entries and counters over REST.",
    no_args_is_help=True,
    add_completion=True,
    rich_markup_mode="rich",
)

app.add_typer(caches_app, name="caches", help="Create, inspect and delete caches.")
app.add_typer(counters_app, name="counters", help="Weak and strong counters.")
app.add_typer(entries_app, name="entries", help="Cache entries.")
app.add_typer(profiles_app, name="profiles", help="Stored connection profiles.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"ispn {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    profile: Optional[str] = typer.Option(
        None, "--profile", "-p", help="Profile name to use."
    ),
    url: Optional[str] = typer.Option(
        None, "--url", help="Server base URL, e.g. http://localhost:11222."
    ),
    username: Optional[str] = typer.Option(
        None, "--username", "-u", help="Basic auth username."
    ),
    password: Optional[str] = typer.Option(
        None, "--password", help="Basic auth password (prefer ISPN_PASSWORD)."
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Root callback executed before every sub-command."""
    from infinispan_rest.config import load_global_config
    from infinispan_rest.exceptions import ConfigError
    from infinispan_rest.output import OutputFormat, OutputManager, set_output, warning

    config_error: Optional[ConfigError] = None
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    else:
        try:
            fmt = load_global_config().output.format
        except ConfigError as exc:
            config_error = exc
            fmt = OutputFormat.AUTO

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    if config_error is not None:
        warning(f"{config_error}; using automatic output format")

    ctx.ensure_object(dict)
    ctx.obj["profile"] = profile
    ctx.obj["url"] = url
    ctx.obj["username"] = username
    ctx.obj["password"] = password


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write the current traceback to the data directory and return its path."""
    from infinispan_rest.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(f"{exc!r}\n\n{traceback.format_exc()}")
    return str(log_path)


def main() -> None:
    """Console-script entry point.

    :class:`~infinispan_rest.exceptions.InfinispanError` exits with the
    error's ``exit_code``; anything else produces a crash log and exit 1.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from infinispan_rest.exceptions import InfinispanError
        from infinispan_rest.output import error

        if isinstance(exc, InfinispanError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
