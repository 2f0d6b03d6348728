"""Tests for free-text changelog parsing."""

from __future__ import annotations

from collections import Counter

import pytest

from shiplog.core.models import Release, today
from shiplog.core.parser import (
    classify_description,
    extract_date,
    match_category_header,
    parse_changelog,
)
from shiplog.core.renderers import render_markdown
from shiplog.core.taxonomy import ChangeCategory


class TestParseChangelog:
    """Tests for parse_changelog()."""

    def test_keep_a_changelog_release(self):
        """Parse a release with explicit category sections."""
        text = (
            "## [1.2.0] - 2024-03-01\n\n### Added\n- Support for dark mode\n\n"
            "### Fixed\n- Fixed login crash\n"
        )
        releases = parse_changelog(text)

        assert len(releases) == 1
        release = releases[0]
        assert release.version == "1.2.0"
        assert release.date == "2024-03-01"
        assert [(c.category, c.description) for c in release.changes] == [
            (ChangeCategory.ADDED, "Support for dark mode"),
            (ChangeCategory.FIXED, "Fixed login crash"),
        ]

    def test_keywords_without_sections(self):
        """Infer categories from keywords when no section headers exist."""
        releases = parse_changelog("## 2.0.0\n- Added new dashboard\n- removed legacy export\n")

        assert len(releases) == 1
        release = releases[0]
        assert release.version == "2.0.0"
        assert release.date == today()
        assert [c.category for c in release.changes] == [
            ChangeCategory.ADDED,
            ChangeCategory.REMOVED,
        ]

    def test_multiple_releases_in_document_order(self, sample_changelog: str):
        """Releases are emitted in the order their headers appear."""
        releases = parse_changelog(sample_changelog)

        assert [r.version for r in releases] == ["1.2.0", "1.1.0"]
        assert releases[1].date == "2024-01-15"
        assert releases[1].changes[0].category == ChangeCategory.CHANGED

    def test_empty_release_is_dropped(self):
        """A header followed directly by another header yields no release."""
        releases = parse_changelog("## 1.1.0\n## 1.0.0\n- Initial release\n")

        assert [r.version for r in releases] == ["1.0.0"]

    def test_trailing_empty_release_is_dropped(self):
        """A final header without items is not emitted."""
        releases = parse_changelog("## 1.0.0\n- Initial release\n## 1.1.0 - 2024-05-01\n")

        assert [r.version for r in releases] == ["1.0.0"]

    def test_items_before_first_release_are_dropped(self):
        """List items with no open release are discarded."""
        releases = parse_changelog("- Orphan item\n## 1.0.0\n- Initial release\n")

        assert len(releases) == 1
        assert [c.description for c in releases[0].changes] == ["Initial release"]

    def test_keyword_overrides_section(self):
        """Keyword sniffing wins over the active section."""
        releases = parse_changelog("## 1.0.0\n### Added\n- Fix typo in README\n")

        assert releases[0].changes[0].category == ChangeCategory.FIXED

    def test_section_applies_when_no_keyword(self):
        """Unclassified items take the active section's category."""
        releases = parse_changelog("## 1.0.0\n### Deprecated\n- The old config format\n")

        assert releases[0].changes[0].category == ChangeCategory.DEPRECATED

    def test_active_category_resets_per_release(self):
        """A new version header resets the active category to added."""
        text = "## 1.1.0\n### Security\n- Hardened sessions\n## 1.0.0\n- Initial release\n"
        releases = parse_changelog(text)

        assert releases[0].changes[0].category == ChangeCategory.SECURITY
        assert releases[1].changes[0].category == ChangeCategory.ADDED

    @pytest.mark.parametrize(
        ("header", "version"),
        [
            ("## [1.2.0] - 2024-03-01", "1.2.0"),
            ("# v3.1", "3.1"),
            ("## [v0.9.12]", "0.9.12"),
            ("##1.0.0", "1.0.0"),
        ],
    )
    def test_version_header_shapes(self, header: str, version: str):
        """Brackets, 'v' prefix and two-component versions are accepted."""
        releases = parse_changelog(f"{header}\n- Something\n")

        assert releases[0].version == version

    def test_slash_date_is_normalized(self):
        """Dates written with '/' are stored with '-'."""
        releases = parse_changelog("## 1.0.0 (2024/02/29)\n- Initial release\n")

        assert releases[0].date == "2024-02-29"

    def test_bullet_markers(self):
        """All three bullet markers are recognized."""
        releases = parse_changelog("## 1.0.0\n- one\n* two\n• three\n")

        assert [c.description for c in releases[0].changes] == ["one", "two", "three"]

    def test_unrecognized_lines_are_ignored(self):
        """Prose and unknown headings do not produce entries."""
        text = "## 1.0.0\nSome prose here.\n### Contributors\n- Thanks everyone\n---\n"
        releases = parse_changelog(text)

        assert [c.description for c in releases[0].changes] == ["Thanks everyone"]

    def test_empty_input(self):
        """Empty text yields no releases."""
        assert parse_changelog("") == []
        assert parse_changelog("\n\n   \n") == []

    def test_fresh_ids(self):
        """Every parsed entry gets a distinct id."""
        releases = parse_changelog("## 1.0.0\n- one\n- two\n## 0.9.0\n- three\n")
        ids = [c.id for r in releases for c in r.changes]

        assert len(set(ids)) == 3


class TestMarkdownRoundTrip:
    """Parsing rendered Markdown recovers the release content."""

    def test_round_trip(self, sample_releases: list[Release]):
        """Versions, dates, descriptions and categories survive."""
        releases = sample_releases
        parsed = parse_changelog(render_markdown(releases))

        assert [(r.version, r.date) for r in parsed] == [(r.version, r.date) for r in releases]
        for original, recovered in zip(releases, parsed, strict=True):
            assert sorted(c.description for c in recovered.changes) == sorted(
                c.description for c in original.changes
            )
            assert Counter(c.category for c in recovered.changes) == Counter(
                c.category for c in original.changes
            )


class TestClassifyDescription:
    """Tests for keyword classification."""

    @pytest.mark.parametrize(
        ("description", "expected"),
        [
            ("Fixed crash on startup", ChangeCategory.FIXED),
            ("Bug in parser", ChangeCategory.FIXED),
            ("Add export button", ChangeCategory.ADDED),
            ("New dashboard", ChangeCategory.ADDED),
            ("Removed legacy API", ChangeCategory.REMOVED),
            ("Delete stale caches", ChangeCategory.REMOVED),
            ("Security headers tightened", ChangeCategory.SECURITY),
            ("Patched CVE-2024-1234", ChangeCategory.SECURITY),
            ("Closed a vulnerability in uploads", ChangeCategory.SECURITY),
            ("Deprecate v1 endpoints", ChangeCategory.DEPRECATED),
            ("Updated dependencies", ChangeCategory.CHANGED),
            ("Improved error messages", ChangeCategory.CHANGED),
        ],
    )
    def test_keyword_rules(self, description: str, expected: ChangeCategory):
        """Keyword prefixes select a category, case-insensitively."""
        assert classify_description(description, ChangeCategory.ADDED) == expected
        assert classify_description(description, ChangeCategory.CHANGED) == expected

    def test_first_rule_wins(self):
        """'Fix' is checked before the security keywords."""
        assert classify_description("Fix CVE-2024-1", ChangeCategory.ADDED) == ChangeCategory.FIXED

    def test_default_when_no_rule_matches(self):
        """Unmatched descriptions keep the given default."""
        assert classify_description("Dark mode", ChangeCategory.CHANGED) == ChangeCategory.CHANGED

    def test_new_requires_trailing_space(self):
        """'new' only counts as a keyword when followed by a space."""
        assert classify_description("Newsletter opt-in", ChangeCategory.CHANGED) == (
            ChangeCategory.CHANGED
        )


class TestHeaderHelpers:
    """Tests for category header and date helpers."""

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("### Added", ChangeCategory.ADDED),
            ("## New", ChangeCategory.ADDED),
            ("## ✨ Features", ChangeCategory.ADDED),
            ("### Bug Fixes", ChangeCategory.FIXED),
            ("## fixes", ChangeCategory.FIXED),
            ("### Updated", ChangeCategory.CHANGED),
            ("### Modified", ChangeCategory.CHANGED),
            ("### Deleted", ChangeCategory.REMOVED),
            ("# Security", ChangeCategory.SECURITY),
            ("### Deprecated", ChangeCategory.DEPRECATED),
        ],
    )
    def test_category_headers(self, line: str, expected: ChangeCategory):
        assert match_category_header(line) == expected

    @pytest.mark.parametrize("line", ["# Changelog", "### Contributors", "Added"])
    def test_non_category_headers(self, line: str):
        assert match_category_header(line) is None

    def test_extract_date(self):
        assert extract_date(" - released 2023/12/31 (final)") == "2023-12-31"
        assert extract_date(" - unreleased") is None
