"""Implementation of the 'snapshot', 'history' and 'restore' commands.

Snapshots are kept in the history file configured under
``[tool.shiplog.history]``; only the most recent ``limit`` are kept.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

from shiplog.cli.utils import emit_output, load_cli_config, read_releases, resolve_input
from shiplog.core.history import SnapshotHistory, create_snapshot, restore_snapshot
from shiplog.core.renderers import render_json
from shiplog.exceptions import ShiplogError

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from shiplog.config import ShiplogConfig


def _load_history(config: ShiplogConfig, err_console: Console) -> SnapshotHistory:
    try:
        return SnapshotHistory.load(config.history.path, limit=config.history.limit)
    except ShiplogError as e:
        err_console.print(f"[red]Error loading history:[/] {escape(str(e))}")
        raise SystemExit(1) from e


def run_snapshot(
    input_path: Path | None,
    name: str | None,
    config_path: Path | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the snapshot command.

    Args:
        input_path: JSON release document or changelog text, defaults to
            the configured changelog
        name: Snapshot name, generated when omitted
        config_path: Optional pyproject.toml or project directory
        console: Console for standard output
        err_console: Console for error output
    """
    config = load_cli_config(config_path, err_console)
    input_path = resolve_input(input_path, config, err_console)
    history = _load_history(config, err_console)

    try:
        releases = read_releases(input_path)
    except ShiplogError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    snapshot = history.add(create_snapshot(name, releases))
    history.save(config.history.path)

    console.print(
        f"  [green]✓[/] Saved snapshot [cyan]{snapshot.id}[/] ({escape(snapshot.name)}), "
        f"{len(history)}/{history.limit} in history"
    )


def run_history(
    delete_id: str | None,
    config_path: Path | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the history command.

    Args:
        delete_id: Snapshot to delete before listing, if any
        config_path: Optional pyproject.toml or project directory
        console: Console for standard output
        err_console: Console for error output
    """
    config = load_cli_config(config_path, err_console)
    history = _load_history(config, err_console)

    if delete_id:
        try:
            removed = history.remove(delete_id)
        except ShiplogError as e:
            err_console.print(f"[red]Error:[/] {escape(str(e))}")
            raise SystemExit(1) from e
        history.save(config.history.path)
        console.print(f"  [green]✓[/] Deleted snapshot [cyan]{removed.id}[/]")

    if not history:
        console.print("[yellow]No saved snapshots yet.[/]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Created", style="dim")
    table.add_column("Releases", justify="right")
    table.add_column("Changes", justify="right")
    for snapshot in history:
        table.add_row(
            snapshot.id,
            escape(snapshot.name),
            snapshot.created_at.strftime("%Y-%m-%d %H:%M:%S"),
            str(len(snapshot.releases)),
            str(sum(len(release.changes) for release in snapshot.releases)),
        )
    console.print(table)


def run_restore(
    snapshot_id: str,
    output: Path | None,
    config_path: Path | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the restore command.

    Args:
        snapshot_id: Snapshot to restore
        output: Optional JSON output file, stdout otherwise
        config_path: Optional pyproject.toml or project directory
        console: Console for standard output
        err_console: Console for error output
    """
    config = load_cli_config(config_path, err_console)
    history = _load_history(config, err_console)

    try:
        snapshot = history.get(snapshot_id)
    except ShiplogError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    emit_output(render_json(restore_snapshot(snapshot)), output, console)
