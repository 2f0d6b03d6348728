"""Entry point for the ``shiplog`` command."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import click
from rich.console import Console

from shiplog import __version__
from shiplog.cli.utils import configure_logging
from shiplog.core.renderers import ExportFormat

console = Console()
err_console = Console(stderr=True)

_EXISTING_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)
_OUTPUT_FILE = click.Path(dir_okay=False, path_type=Path)


@dataclass
class CliContext:
    config_path: Path | None = None


@click.group()
@click.version_option(__version__, prog_name="shiplog")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="pyproject.toml or project directory to read [tool.shiplog] from.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """Author, parse, export and compare changelogs."""
    configure_logging(verbose, err_console)
    ctx.obj = CliContext(config_path=config_path)


@cli.command()
@click.argument("input_path", type=_EXISTING_FILE, required=False)
@click.option("--output", "-o", type=_OUTPUT_FILE, default=None, help="Write JSON here.")
@click.pass_obj
def parse(obj: CliContext, input_path: Path | None, output: Path | None) -> None:
    """Parse free-form changelog text into a JSON release document.

    INPUT_PATH defaults to the configured changelog_path.
    """
    from shiplog.cli.commands.parse import run_parse

    run_parse(input_path, output, obj.config_path, console, err_console)


@cli.command()
@click.argument("input_path", type=_EXISTING_FILE, required=False)
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice([f.value for f in ExportFormat]),
    default=None,
    help="Output format (defaults to [tool.shiplog.export] default_format).",
)
@click.option("--output", "-o", type=_OUTPUT_FILE, default=None, help="Output file.")
@click.pass_obj
def export(obj: CliContext, input_path: Path | None, fmt: str | None, output: Path | None) -> None:
    """Render a changelog as Markdown, JSON or HTML.

    INPUT_PATH defaults to the configured changelog_path.
    """
    from shiplog.cli.commands.export import run_export

    run_export(input_path, fmt, output, obj.config_path, console, err_console)


@cli.command()
@click.argument("input_path", type=_EXISTING_FILE, required=False)
@click.option("--name", "-n", default=None, help="Snapshot name.")
@click.pass_obj
def snapshot(obj: CliContext, input_path: Path | None, name: str | None) -> None:
    """Save a snapshot of a changelog to the history."""
    from shiplog.cli.commands.snapshot import run_snapshot

    run_snapshot(input_path, name, obj.config_path, console, err_console)


@cli.command()
@click.option("--delete", "delete_id", default=None, help="Delete the snapshot with this id.")
@click.pass_obj
def history(obj: CliContext, delete_id: str | None) -> None:
    """List saved snapshots."""
    from shiplog.cli.commands.snapshot import run_history

    run_history(delete_id, obj.config_path, console, err_console)


@cli.command()
@click.argument("snapshot_id")
@click.option("--output", "-o", type=_OUTPUT_FILE, default=None, help="Write JSON here.")
@click.pass_obj
def restore(obj: CliContext, snapshot_id: str, output: Path | None) -> None:
    """Write a snapshot's releases as a JSON release document."""
    from shiplog.cli.commands.snapshot import run_restore

    run_restore(snapshot_id, output, obj.config_path, console, err_console)


@cli.command()
@click.argument("first_id")
@click.argument("second_id")
@click.option("--json", "as_json", is_flag=True, help="Print the diff as JSON.")
@click.pass_obj
def diff(obj: CliContext, first_id: str, second_id: str, as_json: bool) -> None:
    """Compare two snapshots from the history."""
    from shiplog.cli.commands.diff import run_diff

    run_diff(first_id, second_id, as_json, obj.config_path, console, err_console)


@cli.command()
@click.argument("query")
@click.argument("input_path", type=_EXISTING_FILE, required=False)
@click.pass_obj
def search(obj: CliContext, query: str, input_path: Path | None) -> None:
    """Search a changelog's changes by text or category.

    INPUT_PATH defaults to the configured changelog_path.
    """
    from shiplog.cli.commands.search import run_search

    run_search(input_path, query, obj.config_path, console, err_console)


if __name__ == "__main__":
    cli()
