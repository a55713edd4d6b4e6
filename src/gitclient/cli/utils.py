"""CLI utilities."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from gitclient.config.loader import load_config
from gitclient.config.models import GitClientConfig
from gitclient.core.errors import GitClientError
from gitclient.credentials import (
    Credential,
    default_username,
    private_key_credential,
    username_password_credential,
)

F = TypeVar("F", bound=Callable[..., Any])


def auth_options(func: F) -> F:
    """Attach --username/--password/--private-key to a command."""
    func = click.option(
        "--private-key",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="SSH private key file",
    )(func)
    func = click.option("--password", help="Password or access token (needs --username)")(func)
    func = click.option("--username", help="User name; defaults to the current OS user")(func)
    return func


def backend_option(func: F) -> F:
    return click.option(
        "--backend",
        type=click.Choice(["git", "pygit2"]),
        default="git",
        show_default=True,
        help="git implementation to use",
    )(func)


def build_credentials(
    username: str | None, password: str | None, private_key: Path | None
) -> list[Credential]:
    """Turn auth options into credentials, password first."""
    credentials: list[Credential] = []
    if password is not None:
        if not username:
            raise click.UsageError("--password requires --username")
        credentials.append(username_password_credential(username, password))
    if private_key is not None:
        credentials.append(private_key_credential(username or default_username(), private_key))
    return credentials


def load_cli_config() -> GitClientConfig:
    """Load configuration, reporting problems as CLI errors."""
    try:
        return load_config()
    except GitClientError as e:
        raise click.ClickException(str(e)) from e
