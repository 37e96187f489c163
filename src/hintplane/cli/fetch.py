"""hpl fetch command - download library docs and summarize them."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from hintplane.config.loader import load_config
from hintplane.core.errors import DocsError
from hintplane.docs.fetcher import DocsFetcher
from hintplane.index.models import ModuleSummary


async def _fetch(fetcher: DocsFetcher, packages: tuple[str, ...]) -> list[ModuleSummary]:
    async with fetcher:
        return await fetcher.fetch_packages(packages)


def _summary_row(module: ModuleSummary) -> dict[str, object]:
    return {
        "name": module.name,
        "source_path": module.source_path,
        "aliases": len(module.values.aliases),
        "types": len(module.values.tipes),
        "values": len(module.values.values),
    }


@click.command()
@click.argument("packages", nargs=-1, required=True)
@click.option(
    "--project",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Project root holding .hintplane/config.yaml",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def fetch_command(packages: tuple[str, ...], project: Path, as_json: bool) -> None:
    """Fetch documentation for PACKAGES (author/name/version) and list their modules."""
    config = load_config(project.resolve())
    fetcher = DocsFetcher(config.docs)
    try:
        modules = asyncio.run(_fetch(fetcher, packages))
    except DocsError as e:
        raise click.ClickException(e.message) from e

    if as_json:
        click.echo(json.dumps([_summary_row(module) for module in modules]))
        return

    table = Table(title=f"{len(modules)} module(s)")
    table.add_column("Module", style="cyan")
    table.add_column("Aliases", justify="right")
    table.add_column("Types", justify="right")
    table.add_column("Values", justify="right")
    for module in sorted(modules, key=lambda m: m.name):
        table.add_row(
            module.name,
            str(len(module.values.aliases)),
            str(len(module.values.tipes)),
            str(len(module.values.values)),
        )
    Console().print(table)
