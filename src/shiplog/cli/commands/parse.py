"""Implementation of the 'parse' command.

The parse command turns free-form changelog text into a JSON release
document that the other commands can consume.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from shiplog.cli.utils import emit_output, load_cli_config, resolve_input
from shiplog.core.parser import parse_changelog
from shiplog.core.renderers import render_json

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console


def run_parse(
    input_path: Path | None,
    output: Path | None,
    config_path: Path | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the parse command.

    Args:
        input_path: Changelog text file, defaults to the configured changelog
        output: Optional JSON output file, stdout otherwise
        config_path: Optional pyproject.toml or project directory
        console: Console for standard output
        err_console: Console for error output
    """
    config = load_cli_config(config_path, err_console)
    input_path = resolve_input(input_path, config, err_console)

    try:
        text = input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        err_console.print(f"[red]Error reading {input_path}:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    releases = parse_changelog(text)
    if not releases:
        err_console.print(f"[yellow]No releases with changes found in {input_path}.[/]")

    emit_output(render_json(releases), output, console)
