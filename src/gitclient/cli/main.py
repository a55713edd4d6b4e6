"""gitclient CLI - gitclient command."""

import click

from gitclient.cli.backends import backends_command
from gitclient.cli.remote import clone_command, head_rev_command
from gitclient.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="gitclient")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging (shows git commands)")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """gitclient - fetch, clone and check out with registered credentials."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "INFO")


cli.add_command(backends_command, name="backends")
cli.add_command(head_rev_command, name="head-rev")
cli.add_command(clone_command, name="clone")


if __name__ == "__main__":
    cli()
