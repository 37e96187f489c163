"""HintPlane CLI - hpl command."""

import click

from hintplane import __version__
from hintplane.cli.fetch import fetch_command
from hintplane.cli.serve import serve_command
from hintplane.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="hpl")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """HintPlane - symbol index and name resolution for editor tooling."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "INFO")


cli.add_command(serve_command, name="serve")
cli.add_command(fetch_command, name="fetch")


if __name__ == "__main__":
    cli()
