"""Recover structured releases from free-form changelog text.

The parser is forgiving: it understands the common "Keep a Changelog"
dialect and its near-Markdown variants, and silently skips anything
it does not recognize. It never raises.

Each non-blank line is checked against three patterns, first match
wins:

1. Version header, e.g. ``## [1.2.0] - 2024-03-01`` or ``# v2.0``
2. Category header, e.g. ``### Added`` or ``## ✨ Features``
3. List item, e.g. ``- Fixed login crash``

A list item's category comes from the most recent category header
unless its own wording says otherwise ("Fix ...", "Remove ...", ...).
Releases without any list items are dropped.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field

from shiplog.core.models import ChangeEntry, Release, ReleaseSet, today
from shiplog.core.taxonomy import ChangeCategory

logger = logging.getLogger(__name__)

VERSION_HEADER_PATTERN = re.compile(r"^#{1,2}\s*\[?v?(\d+\.\d+(?:\.\d+)?)\]?(.*)$", re.IGNORECASE)

DATE_PATTERN = re.compile(r"\d{4}[-/]\d{2}[-/]\d{2}")

# Up to three '#' so that rendered "### Added" headings are recognized.
# An emoji or punctuation prefix ("### ✨ Features") is tolerated.
_CATEGORY_HEADER_PREFIX = r"^#{1,3}\s*(?:[^\w\s]+\s*)?"

CATEGORY_HEADER_PATTERNS: tuple[tuple[re.Pattern[str], ChangeCategory], ...] = (
    (
        re.compile(_CATEGORY_HEADER_PREFIX + r"(?:added|new|features?)\b", re.IGNORECASE),
        ChangeCategory.ADDED,
    ),
    (
        re.compile(
            _CATEGORY_HEADER_PREFIX + r"(?:fixed|fix(?:es)?|bug\s*fix(?:es)?)\b", re.IGNORECASE
        ),
        ChangeCategory.FIXED,
    ),
    (
        re.compile(_CATEGORY_HEADER_PREFIX + r"(?:changed|changes|updated|modified)\b", re.IGNORECASE),
        ChangeCategory.CHANGED,
    ),
    (
        re.compile(_CATEGORY_HEADER_PREFIX + r"(?:removed|deleted)\b", re.IGNORECASE),
        ChangeCategory.REMOVED,
    ),
    (
        re.compile(_CATEGORY_HEADER_PREFIX + r"security\b", re.IGNORECASE),
        ChangeCategory.SECURITY,
    ),
    (
        re.compile(_CATEGORY_HEADER_PREFIX + r"deprecated\b", re.IGNORECASE),
        ChangeCategory.DEPRECATED,
    ),
)

LIST_ITEM_PATTERN = re.compile(r"^\s*[-*•]\s+(.+)$")


def _starts_with(*prefixes: str) -> Callable[[str], bool]:
    return lambda text: text.startswith(prefixes)


def _is_security(text: str) -> bool:
    return text.startswith("security") or "vulnerability" in text or "cve" in text


# Evaluated in order against the lower-cased description; first match wins.
KEYWORD_RULES: tuple[tuple[Callable[[str], bool], ChangeCategory], ...] = (
    (_starts_with("fix", "bug"), ChangeCategory.FIXED),
    (_starts_with("add", "new "), ChangeCategory.ADDED),
    (_starts_with("remove", "delete"), ChangeCategory.REMOVED),
    (_is_security, ChangeCategory.SECURITY),
    (_starts_with("deprecat"), ChangeCategory.DEPRECATED),
    (_starts_with("update", "change", "improve"), ChangeCategory.CHANGED),
)


@dataclass
class _ParserState:
    """Cursor threaded through the lines of a single parse call."""

    releases: ReleaseSet = field(default_factory=list)
    current: Release | None = None
    category: ChangeCategory = ChangeCategory.ADDED

    def close_release(self) -> None:
        if self.current is None:
            return
        if self.current.changes:
            self.releases.append(self.current)
        else:
            logger.debug("Dropping release %s without changes", self.current.version)
        self.current = None


def classify_description(description: str, default: ChangeCategory) -> ChangeCategory:
    """Infer a category from the wording of a change description.

    Args:
        description: Change description
        default: Category to use when no keyword rule matches

    Returns:
        Category of the first matching keyword rule, else ``default``
    """
    text = description.lower()
    for predicate, category in KEYWORD_RULES:
        if predicate(text):
            return category
    return default


def extract_date(text: str) -> str | None:
    """Find the first YYYY-MM-DD (or YYYY/MM/DD) date in text."""
    match = DATE_PATTERN.search(text)
    if match is None:
        return None
    return match.group(0).replace("/", "-")


def match_category_header(line: str) -> ChangeCategory | None:
    """Return the category a header line names, if any."""
    for pattern, category in CATEGORY_HEADER_PATTERNS:
        if pattern.match(line):
            return category
    return None


def parse_changelog(text: str) -> ReleaseSet:
    """Parse changelog text into releases.

    Args:
        text: Arbitrary changelog text

    Returns:
        Releases in document order. Only releases with at least one
        change are included.
    """
    state = _ParserState()

    for line in text.splitlines():
        stripped = line.strip()
        if not stripped:
            continue

        version_match = VERSION_HEADER_PATTERN.match(stripped)
        if version_match:
            state.close_release()
            version, remainder = version_match.groups()
            state.current = Release(version=version, date=extract_date(remainder) or today())
            state.category = ChangeCategory.ADDED
            continue

        header_category = match_category_header(stripped)
        if header_category is not None:
            state.category = header_category
            continue

        item_match = LIST_ITEM_PATTERN.match(stripped)
        if item_match:
            if state.current is None:
                logger.debug("Skipping list item outside a release: %s", stripped)
                continue
            description = item_match.group(1).strip()
            state.current.changes.append(
                ChangeEntry(
                    category=classify_description(description, state.category),
                    description=description,
                )
            )
            continue

        logger.debug("Ignoring unrecognized line: %s", stripped)

    state.close_release()
    logger.debug("Parsed %d release(s)", len(state.releases))
    return state.releases
