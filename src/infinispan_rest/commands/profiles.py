"""Profile commands -- manage stored connection targets.

A profile bundles a server base URL, a username, and *where* to read the
password from; the password itself is never written to disk.

Example::

    ispn profiles add prod --url https://ispn.example.com --username admin \\
        --password-source env:ISPN_PROD_PASSWORD --default
    ispn --profile prod caches list
"""

from __future__ import annotations

import typer

from infinispan_rest.commands import fail
from infinispan_rest.exceptions import InfinispanError, InvalidUsageError
from infinispan_rest.output import format_response, info, print_table, success

profiles_app = typer.Typer(no_args_is_help=True)


@profiles_app.command("add")
def add_profile(
    name: str = typer.Argument(help="Profile name."),
    url: str = typer.Option("http://localhost:11222", "--url", help="Server base URL."),
    username: str = typer.Option(..., "--username", "-u", help="Basic auth username."),
    password_source: str = typer.Option(
        "prompt",
        "--password-source",
        help="Where to read the password: env:VAR, file:PATH, prompt, literal:VALUE.",
    ),
    timeout: float = typer.Option(30, "--timeout", help="Request timeout in seconds."),
    verify_ssl: bool = typer.Option(True, "--verify-ssl/--no-verify-ssl", help="Verify TLS certificates."),
    make_default: bool = typer.Option(False, "--default", help="Use this profile by default."),
) -> None:
    """Create or overwrite a profile."""
    from infinispan_rest.config import load_global_config, save_global_config, save_profile
    from infinispan_rest.models import AuthConfig, Profile, RequestConfig

    profile = Profile(
        name=name,
        base_url=url,
        auth=AuthConfig(username=username, source=password_source),
        request=RequestConfig(timeout=timeout, verify_ssl=verify_ssl),
    )
    try:
        save_profile(profile)
        if make_default:
            config = load_global_config()
            config.default_profile = name
            save_global_config(config)
    except InfinispanError as exc:
        fail(exc)

    success(f"Saved profile '{name}'")


@profiles_app.command("list")
def list_profiles_command() -> None:
    """List stored profiles."""
    from infinispan_rest.config import list_profiles, load_global_config, load_profile

    try:
        default = load_global_config().default_profile
        profiles = [load_profile(name) for name in list_profiles()]
    except InfinispanError as exc:
        fail(exc)

    if not profiles:
        info("No profiles. Create one with 'ispn profiles add'.")
        return

    rows = [
        [
            p.name,
            p.base_url,
            p.auth.username if p.auth else "",
            "*" if p.name == default else "",
        ]
        for p in profiles
    ]
    print_table(["name", "base_url", "username", "default"], rows, title="Profiles")


@profiles_app.command("show")
def show_profile(name: str = typer.Argument(help="Profile name.")) -> None:
    """Show a stored profile."""
    from infinispan_rest.config import load_profile

    try:
        profile = load_profile(name)
    except InfinispanError as exc:
        fail(exc)
    format_response(profile.model_dump(mode="json"))


@profiles_app.command("remove")
def remove_profile(name: str = typer.Argument(help="Profile name.")) -> None:
    """Delete a stored profile."""
    from infinispan_rest.config import delete_profile, load_global_config, save_global_config

    try:
        delete_profile(name)
        config = load_global_config()
        if config.default_profile == name:
            config.default_profile = None
            save_global_config(config)
    except InfinispanError as exc:
        fail(exc)
    success(f"Removed profile '{name}'")


@profiles_app.command("use")
def use_profile(name: str = typer.Argument(help="Profile name.")) -> None:
    """Make a stored profile the default."""
    from infinispan_rest.config import load_global_config, profile_exists, save_global_config

    try:
        if not profile_exists(name):
            raise InvalidUsageError(f"Profile '{name}' not found")
        config = load_global_config()
    except InfinispanError as exc:
        fail(exc)
    config.default_profile = name
    save_global_config(config)
    success(f"Default profile is now '{name}'")
