"""Core changelog logic for shiplog.

This module contains the fundamental building blocks:
- Change taxonomy and the release data model
- Free-text changelog parsing
- Markdown, JSON and HTML rendering
- Snapshot history and snapshot diffing
"""

from __future__ import annotations

from shiplog.core.diff import (
    CardinalityRenameDetector,
    ChangeDiff,
    RenameDetector,
    SnapshotDiff,
    VersionRename,
    diff_releases,
    diff_snapshots,
    order_snapshots,
)
from shiplog.core.history import Snapshot, SnapshotHistory, create_snapshot, restore_snapshot
from shiplog.core.models import (
    ChangeEntry,
    Release,
    ReleaseSet,
    copy_releases,
    new_id,
    prepare_for_export,
)
from shiplog.core.parser import classify_description, parse_changelog
from shiplog.core.renderers import (
    ExportFormat,
    group_changes,
    load_releases_json,
    render,
    render_html,
    render_json,
    render_markdown,
)
from shiplog.core.search import SearchResult, search_changes
from shiplog.core.taxonomy import CATEGORY_INFO, CATEGORY_ORDER, ChangeCategory, category_info

__all__ = [
    # Taxonomy
    "CATEGORY_INFO",
    "CATEGORY_ORDER",
    # Diff
    "CardinalityRenameDetector",
    "ChangeCategory",
    "ChangeDiff",
    # Models
    "ChangeEntry",
    # Renderers
    "ExportFormat",
    "Release",
    "ReleaseSet",
    "RenameDetector",
    "SearchResult",
    # History
    "Snapshot",
    "SnapshotDiff",
    "SnapshotHistory",
    "VersionRename",
    "category_info",
    # Parser
    "classify_description",
    "copy_releases",
    "create_snapshot",
    "diff_releases",
    "diff_snapshots",
    "group_changes",
    "load_releases_json",
    "new_id",
    "order_snapshots",
    "parse_changelog",
    "prepare_for_export",
    "render",
    "render_html",
    "render_json",
    "render_markdown",
    "restore_snapshot",
    # Search
    "search_changes",
]
