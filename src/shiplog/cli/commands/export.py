"""Implementation of the 'export' command.

The export command renders a changelog as Markdown, JSON or HTML.
Input may be a JSON release document or free-form changelog text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from shiplog.cli.utils import emit_output, load_cli_config, read_releases, resolve_input
from shiplog.core.renderers import FORMAT_EXTENSIONS, ExportFormat, render
from shiplog.exceptions import ShiplogError

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console


def run_export(
    input_path: Path | None,
    fmt: str | None,
    output: Path | None,
    config_path: Path | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the export command.

    Args:
        input_path: JSON release document or changelog text, defaults to
            the configured changelog
        fmt: Export format, defaults to the configured format
        output: Output file. Falls back to the configured output
            directory, then to stdout.
        config_path: Optional pyproject.toml or project directory
        console: Console for standard output
        err_console: Console for error output
    """
    config = load_cli_config(config_path, err_console)
    input_path = resolve_input(input_path, config, err_console)
    export_format = ExportFormat(fmt) if fmt else config.export.default_format

    try:
        releases = read_releases(input_path, filtered=True)
        content = render(releases, export_format)
    except ShiplogError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    if output is None and config.export.output_dir is not None:
        output = config.export.output_dir / f"CHANGELOG{FORMAT_EXTENSIONS[export_format]}"

    emit_output(content, output, console)
