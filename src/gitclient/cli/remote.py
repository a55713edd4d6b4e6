"""gitclient head-rev and clone commands."""

from pathlib import Path

import click

from gitclient.cli.utils import auth_options, backend_option, build_credentials, load_cli_config
from gitclient.client import GitClient
from gitclient.errors import GitError
from gitclient.models import CheckoutOptions, CloneOptions


@click.command()
@click.argument("url")
@click.argument("branch", default="master")
@backend_option
@auth_options
def head_rev_command(
    url: str,
    branch: str,
    backend: str,
    username: str | None,
    password: str | None,
    private_key: Path | None,
) -> None:
    """Print the commit at the tip of BRANCH (default: master) on URL."""
    config = load_cli_config()
    client = GitClient(Path.cwd(), backend, config=config.git)
    for credential in build_credentials(username, password, private_key):
        client.add_default_credentials(credential)
    try:
        click.echo(client.get_head_rev(url, branch))
    except GitError as e:
        raise click.ClickException(str(e)) from e
    finally:
        client.clear_credentials()


@click.command()
@click.argument("url")
@click.argument("dest", type=click.Path(file_okay=False, path_type=Path))
@click.option("--branch", default="master", show_default=True, help="Branch to check out")
@backend_option
@auth_options
def clone_command(
    url: str,
    dest: Path,
    branch: str,
    backend: str,
    username: str | None,
    password: str | None,
    private_key: Path | None,
) -> None:
    """Clone URL into DEST and check out BRANCH."""
    config = load_cli_config()
    client = GitClient(dest, backend, config=config.git)
    for credential in build_credentials(username, password, private_key):
        client.add_default_credentials(credential)
    try:
        client.clone(CloneOptions(url))
        client.checkout(CheckoutOptions(branch, f"origin/{branch}"))
        sha = client.resolve_ref(branch)
    except GitError as e:
        raise click.ClickException(str(e)) from e
    finally:
        client.clear_credentials()
    click.echo(f"Checked out {branch} at {sha} in {dest}")
