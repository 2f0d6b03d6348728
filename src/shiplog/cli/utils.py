"""Shared helpers for CLI commands."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click
from rich.logging import RichHandler
from rich.markup import escape

from shiplog.config import load_config
from shiplog.core.models import prepare_for_export
from shiplog.core.parser import parse_changelog
from shiplog.core.renderers import load_releases_json
from shiplog.exceptions import ReleaseDataError, ShiplogError

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from shiplog.config import ShiplogConfig
    from shiplog.core.models import ReleaseSet


def configure_logging(verbose: bool, console: Console | None = None) -> None:
    """Route log records through rich. DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, rich_tracebacks=True)],
        force=True,
    )


def read_releases(path: Path, *, filtered: bool = False) -> ReleaseSet:
    """Read releases from a JSON release document or free-form changelog text.

    Files ending in ``.json`` are decoded as release documents, anything
    else goes through the changelog parser.

    Raises:
        ReleaseDataError: If the file cannot be read or a JSON document
            is malformed
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReleaseDataError(f"Cannot read {path}: {e}") from e

    if path.suffix.lower() == ".json":
        releases = load_releases_json(text)
    else:
        releases = parse_changelog(text)
    return prepare_for_export(releases) if filtered else releases


def emit_output(content: str, output: Path | None, console: Console) -> None:
    """Write content to a file, or to stdout when no file is given."""
    if output is None:
        click.echo(content, nl=not content.endswith("\n"))
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    console.print(f"  [green]✓[/] Wrote [cyan]{output}[/]")


def load_cli_config(config_path: Path | None, err_console: Console) -> ShiplogConfig:
    """Load configuration, exiting with status 1 on error."""
    try:
        return load_config(config_path)
    except ShiplogError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e


def resolve_input(input_path: Path | None, config: ShiplogConfig, err_console: Console) -> Path:
    """Return the given input file, or the configured changelog when none is given."""
    if input_path is not None:
        return input_path

    if not config.changelog_path.is_file():
        err_console.print(
            f"[red]Error:[/] No input given and changelog not found at "
            f"{escape(str(config.changelog_path))}"
        )
        raise SystemExit(1)
    return config.changelog_path
