"""Shared fixtures for shiplog tests."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest

from shiplog.core.models import ChangeEntry, Release
from shiplog.core.taxonomy import ChangeCategory

if TYPE_CHECKING:
    from pathlib import Path

    from shiplog.core.models import ReleaseSet


SAMPLE_CHANGELOG = """\
# Changelog

All notable changes to this project will be documented in this file.

## [1.2.0] - 2024-03-01

### Added

- Support for dark mode

### Fixed

- Fixed login crash

## [1.1.0] - 2024-01-15

### Changed

- Faster startup
"""


@pytest.fixture
def sample_changelog() -> str:
    """Keep a Changelog formatted text with two releases."""
    return SAMPLE_CHANGELOG


@pytest.fixture
def sample_releases() -> ReleaseSet:
    """Two releases with changes in mixed authoring order."""
    return [
        Release(
            version="1.2.0",
            date="2024-03-01",
            changes=[
                ChangeEntry(id="c1", category=ChangeCategory.FIXED, description="Fixed login crash"),
                ChangeEntry(id="c2", category=ChangeCategory.ADDED, description="Dark mode"),
                ChangeEntry(id="c3", category=ChangeCategory.SECURITY, description="Patched XSS"),
                ChangeEntry(id="c4", category=ChangeCategory.ADDED, description="Export to PDF"),
            ],
        ),
        Release(
            version="1.1.0",
            date="2024-01-15",
            changes=[
                ChangeEntry(id="c5", category=ChangeCategory.CHANGED, description="Faster startup"),
            ],
        ),
    ]


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Project directory with a pyproject.toml holding a shiplog section."""
    (tmp_path / "pyproject.toml").write_text(
        """\
[project]
name = "test-project"
version = "1.0.0"

[tool.shiplog]
changelog_path = "docs/CHANGELOG.md"

[tool.shiplog.history]
path = "history.json"
limit = 3
"""
    )
    return tmp_path
