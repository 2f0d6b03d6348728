"""Search changes by text or category."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from shiplog.core.models import ChangeEntry

if TYPE_CHECKING:
    from shiplog.core.models import ReleaseSet


class SearchMatch(BaseModel):
    release: str
    change: ChangeEntry


class SearchResult(BaseModel):
    """Changes matching a query, plus whether any version label matched."""

    query: str
    matches: list[SearchMatch] = Field(default_factory=list)
    version_match: bool = False

    @property
    def found(self) -> bool:
        return bool(self.matches) or self.version_match


def search_changes(releases: ReleaseSet, query: str) -> SearchResult:
    """Find changes whose description or category contains ``query``.

    Matching is case-insensitive. A blank query matches nothing.
    """
    needle = query.strip().lower()
    if not needle:
        return SearchResult(query=query)

    matches = [
        SearchMatch(release=release.version, change=change)
        for release in releases
        for change in release.changes
        if needle in change.description.lower() or needle in change.category.value
    ]
    version_match = any(needle in release.version.lower() for release in releases)
    return SearchResult(query=query, matches=matches, version_match=version_match)
