"""Compare two snapshots of a changelog.

Changes are compared as ``(version, category, description)`` keys:
a change that exists only in the newer snapshot is *added*, one that
exists only in the older snapshot is *removed*. Editing a description
therefore shows up as one removal plus one addition.

Version renames cannot be told apart from an unrelated add and remove
by keys alone, so they are guessed by a pluggable
:class:`RenameDetector`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, ConfigDict, Field

from shiplog.core.taxonomy import ChangeCategory

if TYPE_CHECKING:
    from collections.abc import Sequence

    from shiplog.core.history import Snapshot
    from shiplog.core.models import ReleaseSet

ChangeKey = tuple[str, ChangeCategory, str]


class ChangeDiff(BaseModel):
    """A change present on one side only."""

    release: str
    change: str


class VersionRename(BaseModel):
    """A release whose version label probably changed."""

    model_config = ConfigDict(populate_by_name=True)

    release: str = "Version"
    old_version: str = Field(alias="oldVersion")
    new_version: str = Field(alias="newVersion")


class SnapshotDiff(BaseModel):
    """Differences between an older and a newer snapshot."""

    added: list[ChangeDiff] = Field(default_factory=list)
    removed: list[ChangeDiff] = Field(default_factory=list)
    modified: list[VersionRename] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.modified)


class RenameDetector(Protocol):
    """Strategy for guessing version renames between two snapshots."""

    def detect(
        self, older_versions: Sequence[str], newer_versions: Sequence[str]
    ) -> list[VersionRename]: ...


class CardinalityRenameDetector:
    """Assume a rename whenever both sides have the same number of versions.

    Each version found only in the newer snapshot is paired with the
    first version found only in the older one. This misfires when a
    version is added and an unrelated one removed in the same step.
    """

    def detect(
        self, older_versions: Sequence[str], newer_versions: Sequence[str]
    ) -> list[VersionRename]:
        if len(older_versions) != len(newer_versions) or not older_versions:
            return []

        older_only = [v for v in older_versions if v not in newer_versions]
        if not older_only:
            return []

        return [
            VersionRename(old_version=older_only[0], new_version=version)
            for version in newer_versions
            if version not in older_versions
        ]


def _change_keys(releases: ReleaseSet) -> dict[ChangeKey, None]:
    # dict keeps insertion order, which is the reporting order
    keys: dict[ChangeKey, None] = {}
    for release in releases:
        for change in release.changes:
            if change.description:
                keys[(release.version, change.category, change.description)] = None
    return keys


def _versions(releases: ReleaseSet) -> list[str]:
    return list(dict.fromkeys(release.version for release in releases))


def diff_releases(
    older: ReleaseSet,
    newer: ReleaseSet,
    *,
    rename_detector: RenameDetector | None = None,
) -> SnapshotDiff:
    """Compare two release sets.

    Args:
        older: Earlier state
        newer: Later state
        rename_detector: Rename strategy, defaults to
            :class:`CardinalityRenameDetector`

    Returns:
        Added and removed changes plus inferred version renames
    """
    detector = rename_detector or CardinalityRenameDetector()
    older_keys = _change_keys(older)
    newer_keys = _change_keys(newer)

    added = [
        ChangeDiff(release=version, change=description)
        for version, category, description in newer_keys
        if (version, category, description) not in older_keys
    ]
    removed = [
        ChangeDiff(release=version, change=description)
        for version, category, description in older_keys
        if (version, category, description) not in newer_keys
    ]

    return SnapshotDiff(
        added=added,
        removed=removed,
        modified=detector.detect(_versions(older), _versions(newer)),
    )


def diff_snapshots(
    older: Snapshot,
    newer: Snapshot,
    *,
    rename_detector: RenameDetector | None = None,
) -> SnapshotDiff:
    """Compare two snapshots.

    The caller decides which snapshot is older; see :func:`order_snapshots`.
    """
    return diff_releases(older.releases, newer.releases, rename_detector=rename_detector)


def order_snapshots(first: Snapshot, second: Snapshot) -> tuple[Snapshot, Snapshot]:
    """Return ``(older, newer)`` by creation time, keeping argument order on ties."""
    if second.created_at < first.created_at:
        return second, first
    return first, second
