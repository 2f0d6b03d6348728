"""Implementation of the 'diff' command.

The two snapshots may be given in any order; the older one (by
creation time) is used as the base.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
from rich.markup import escape
from rich.panel import Panel

from shiplog.cli.utils import load_cli_config
from shiplog.core.diff import diff_snapshots, order_snapshots
from shiplog.core.history import SnapshotHistory
from shiplog.exceptions import ShiplogError

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from shiplog.core.diff import SnapshotDiff


def run_diff(
    first_id: str,
    second_id: str,
    as_json: bool,
    config_path: Path | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the diff command.

    Args:
        first_id: Id of one snapshot
        second_id: Id of the other snapshot
        as_json: Print the diff as JSON instead of a summary
        config_path: Optional pyproject.toml or project directory
        console: Console for standard output
        err_console: Console for error output
    """
    config = load_cli_config(config_path, err_console)

    try:
        history = SnapshotHistory.load(config.history.path, limit=config.history.limit)
        older, newer = order_snapshots(history.get(first_id), history.get(second_id))
    except ShiplogError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    result = diff_snapshots(older, newer)

    if as_json:
        click.echo(result.model_dump_json(by_alias=True, indent=2))
        return

    console.print(
        f"Comparing [cyan]{escape(older.name)}[/] → [cyan]{escape(newer.name)}[/]\n"
    )
    console.print(_format_diff(result))


def _format_diff(result: SnapshotDiff) -> Panel:
    if result.is_empty:
        return Panel("[dim]No differences found[/]", title="Differences", border_style="dim")

    lines: list[str] = []
    if result.added:
        lines.append(f"[green]+ Added ({len(result.added)})[/]")
        lines.extend(
            f"  [green]+[/] [dim]{escape(item.release)}:[/] {escape(item.change)}"
            for item in result.added
        )
    if result.removed:
        lines.append(f"[red]- Removed ({len(result.removed)})[/]")
        lines.extend(
            f"  [red]-[/] [dim]{escape(item.release)}:[/] {escape(item.change)}"
            for item in result.removed
        )
    if result.modified:
        lines.append(f"[yellow]~ Modified ({len(result.modified)})[/]")
        lines.extend(
            f"  [yellow]~[/] {item.release}: "
            f"{escape(item.old_version)} → {escape(item.new_version)}"
            for item in result.modified
        )

    return Panel("\n".join(lines), title="Differences", border_style="yellow")
