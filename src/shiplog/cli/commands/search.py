"""Implementation of the 'search' command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

from shiplog.cli.utils import load_cli_config, read_releases, resolve_input
from shiplog.core.search import search_changes
from shiplog.core.taxonomy import category_info
from shiplog.exceptions import ShiplogError

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console


def run_search(
    input_path: Path | None,
    query: str,
    config_path: Path | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the search command.

    Args:
        input_path: JSON release document or changelog text, defaults to
            the configured changelog
        query: Text to look for in descriptions and categories
        config_path: Optional pyproject.toml or project directory
        console: Console for standard output
        err_console: Console for error output
    """
    config = load_cli_config(config_path, err_console)
    input_path = resolve_input(input_path, config, err_console)

    try:
        releases = read_releases(input_path, filtered=True)
    except ShiplogError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    result = search_changes(releases, query)

    if result.matches:
        count = len(result.matches)
        console.print(f"[green]{count} matching change{'s' if count != 1 else ''} found[/]")
    elif result.version_match:
        console.print("[green]Version match found[/]")
        return
    else:
        console.print(f'[yellow]No matches for "{escape(query)}"[/]')
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Version", style="cyan")
    table.add_column("Type")
    table.add_column("Description")
    for match in result.matches:
        info = category_info(match.change.category)
        table.add_row(
            escape(match.release), f"{info.emoji} {info.label}", escape(match.change.description)
        )
    console.print(table)
