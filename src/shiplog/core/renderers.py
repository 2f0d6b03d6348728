"""Render releases as Markdown, JSON or HTML.

All renderers group each release's changes by category, in taxonomy
order, keeping authoring order within a category. Categories without
changes are omitted. Output is deterministic.

Renderers do not filter their input; pass releases through
:func:`shiplog.core.models.prepare_for_export` first.
"""

from __future__ import annotations

import html
import json
from collections.abc import Callable
from enum import StrEnum

from pydantic import TypeAdapter, ValidationError

from shiplog.core.models import ChangeEntry, Release, ReleaseSet
from shiplog.core.taxonomy import CATEGORY_ORDER, ChangeCategory, category_info
from shiplog.exceptions import ReleaseDataError, UnknownFormatError

MARKDOWN_HEADER = (
    "# Changelog\n\nAll notable changes to this project will be documented in this file.\n\n"
)

_RELEASES_ADAPTER = TypeAdapter(list[Release])


class ExportFormat(StrEnum):
    """Supported export formats."""

    MARKDOWN = "markdown"
    JSON = "json"
    HTML = "html"


FORMAT_EXTENSIONS: dict[ExportFormat, str] = {
    ExportFormat.MARKDOWN: ".md",
    ExportFormat.JSON: ".json",
    ExportFormat.HTML: ".html",
}


def group_changes(release: Release) -> list[tuple[ChangeCategory, list[ChangeEntry]]]:
    """Bucket a release's changes by category.

    Args:
        release: Release to group

    Returns:
        (category, changes) pairs in taxonomy order, non-empty only
    """
    buckets: dict[ChangeCategory, list[ChangeEntry]] = {category: [] for category in CATEGORY_ORDER}
    for change in release.changes:
        buckets[change.category].append(change)
    return [(category, changes) for category, changes in buckets.items() if changes]


# Markdown


def render_markdown(releases: ReleaseSet) -> str:
    """Render releases as a Keep a Changelog style Markdown document."""
    lines = [MARKDOWN_HEADER]

    for release in releases:
        lines.append(f"## [{release.version}] - {release.date}\n\n")
        for category, changes in group_changes(release):
            lines.append(f"### {category_info(category).label}\n\n")
            lines.extend(f"- {change.description}\n" for change in changes)
            lines.append("\n")

    return "".join(lines)


# JSON


def render_json(releases: ReleaseSet) -> str:
    """Render releases as ``{"releases": [...]}`` with 2-space indentation."""
    payload = {
        "releases": [release.model_dump(mode="json", by_alias=True) for release in releases]
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def load_releases_json(text: str) -> ReleaseSet:
    """Decode a document produced by :func:`render_json`.

    A bare list of releases is accepted as well.

    Args:
        text: JSON text

    Returns:
        Decoded releases

    Raises:
        ReleaseDataError: If the text is not a valid release document
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ReleaseDataError(f"Invalid JSON: {e}") from e

    if isinstance(data, dict):
        if "releases" not in data:
            raise ReleaseDataError("Expected a 'releases' key in the JSON document")
        data = data["releases"]

    try:
        return _RELEASES_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise ReleaseDataError(f"Invalid release data: {e}") from e


# HTML

_HTML_HEAD = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Changelog</title>
  <style>
    * { box-sizing: border-box; margin: 0; padding: 0; }
    body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; background: #0a0a0a; color: #e4e4e7; padding: 2rem; line-height: 1.6; }
    .container { max-width: 800px; margin: 0 auto; }
    h1 { font-size: 2.5rem; margin-bottom: 0.5rem; background: linear-gradient(135deg, #10b981, #3b82f6); -webkit-background-clip: text; -webkit-text-fill-color: transparent; }
    .subtitle { color: #71717a; margin-bottom: 2rem; }
    .release { background: #18181b; border-radius: 1rem; padding: 1.5rem; margin-bottom: 1.5rem; border: 1px solid #27272a; }
    .release-header { display: flex; align-items: center; gap: 1rem; margin-bottom: 1rem; }
    .version { font-size: 1.5rem; font-weight: 700; color: #10b981; }
    .date { color: #71717a; font-size: 0.875rem; }
    .section { margin-bottom: 1rem; }
    .section-title { font-size: 0.875rem; font-weight: 600; margin-bottom: 0.5rem; padding: 0.25rem 0.75rem; border-radius: 0.5rem; display: inline-block; }
    .changes { list-style: none; padding-left: 1rem; }
    .changes li { padding: 0.25rem 0; color: #a1a1aa; }
    .changes li::before { content: "→"; margin-right: 0.5rem; color: #52525b; }
  </style>
</head>
<body>
  <div class="container">
    <h1>📋 Changelog</h1>
    <p class="subtitle">All notable changes to this project will be documented here.</p>
"""

_HTML_FOOT = """  </div>
</body>
</html>
"""


def _render_html_release(release: Release) -> list[str]:
    lines = [
        '    <div class="release">\n',
        '      <div class="release-header">\n',
        f'        <span class="version">v{html.escape(release.version)}</span>\n',
        f'        <span class="date">{html.escape(release.date)}</span>\n',
        "      </div>\n",
    ]

    for category, changes in group_changes(release):
        info = category_info(category)
        lines.append('      <div class="section">\n')
        lines.append(
            f'        <span class="section-title" style="background: {info.color}20; '
            f'color: {info.color};">{info.emoji} {info.label}</span>\n'
        )
        lines.append('        <ul class="changes">\n')
        lines.extend(f"          <li>{html.escape(change.description)}</li>\n" for change in changes)
        lines.append("        </ul>\n")
        lines.append("      </div>\n")

    lines.append("    </div>\n")
    return lines


def render_html(releases: ReleaseSet) -> str:
    """Render releases as a standalone HTML page, one card per release."""
    lines = [_HTML_HEAD]
    for release in releases:
        lines.extend(_render_html_release(release))
    lines.append(_HTML_FOOT)
    return "".join(lines)


RENDERERS: dict[ExportFormat, Callable[[ReleaseSet], str]] = {
    ExportFormat.MARKDOWN: render_markdown,
    ExportFormat.JSON: render_json,
    ExportFormat.HTML: render_html,
}


def render(releases: ReleaseSet, fmt: ExportFormat | str) -> str:
    """Render releases in the given format.

    Raises:
        UnknownFormatError: If ``fmt`` is not a supported format
    """
    try:
        export_format = ExportFormat(fmt)
    except ValueError as e:
        raise UnknownFormatError(str(fmt)) from e
    return RENDERERS[export_format](releases)
