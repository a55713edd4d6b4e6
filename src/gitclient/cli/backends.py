"""gitclient backends command - report usable git implementations."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from gitclient.backends import BACKEND_REGISTRY, CliGitBackend, available_backends
from gitclient.cli.utils import load_cli_config


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def backends_command(as_json: bool) -> None:
    """List git backends that can run authenticated operations here."""
    config = load_cli_config()
    usable = available_backends(Path.cwd(), config.git)
    version = CliGitBackend(Path.cwd(), config=config.git).version()
    native_version = str(version) if version is not None else None

    if as_json:
        click.echo(
            json.dumps(
                {
                    "available": usable,
                    "git_version": native_version,
                    "min_credentials_version": config.git.min_credentials_version,
                }
            )
        )
        return

    table = Table(show_header=True, box=None, padding=(0, 2), pad_edge=False)
    table.add_column("Backend")
    table.add_column("Credentials")
    table.add_column("Version", style="dim")
    for name in BACKEND_REGISTRY:
        supported = "[green]yes[/green]" if name in usable else "[red]no[/red]"
        detail = (native_version or "not installed") if name == CliGitBackend.name else "libgit2"
        table.add_row(name, supported, detail)
    Console().print(table)
