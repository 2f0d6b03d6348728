"""Snapshots of a changelog and a bounded history of them.

A snapshot is a named, timestamped deep copy of a release set. Later
edits to the live releases never affect a snapshot taken earlier.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from shiplog.core.models import Release, copy_releases, new_id
from shiplog.exceptions import SnapshotError, SnapshotNotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from shiplog.core.models import ReleaseSet

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 10


class Snapshot(BaseModel):
    """Immutable point-in-time copy of a release set."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=new_id)
    name: str
    releases: list[Release] = Field(default_factory=list)
    created_at: datetime = Field(
        alias="createdAt", default_factory=lambda: datetime.now(UTC)
    )


_SNAPSHOTS_ADAPTER = TypeAdapter(list[Snapshot])


def default_snapshot_name(releases: ReleaseSet, now: datetime) -> str:
    """Name used when a snapshot is saved without one, e.g. ``v1.2.0 - 2024-03-01``."""
    version = releases[0].version if releases else "1.0.0"
    return f"v{version} - {now.strftime('%Y-%m-%d')}"


def create_snapshot(
    name: str | None,
    releases: ReleaseSet,
    *,
    now: datetime | None = None,
) -> Snapshot:
    """Take a snapshot of the given releases.

    Args:
        name: Snapshot name; blank names get a generated default
        releases: Live releases, deep copied into the snapshot
        now: Creation time, defaults to the current UTC time

    Returns:
        New snapshot
    """
    created_at = now or datetime.now(UTC)
    name = (name or "").strip() or default_snapshot_name(releases, created_at)
    return Snapshot(name=name, releases=copy_releases(releases), created_at=created_at)


def restore_snapshot(snapshot: Snapshot) -> ReleaseSet:
    """Copy a snapshot's releases back out for editing.

    Entries get fresh ids so restored entries never collide with
    entries already in use.
    """
    return copy_releases(snapshot.releases, fresh_ids=True)


class SnapshotHistory:
    """Most recent snapshots, oldest first, capped at ``limit``."""

    def __init__(self, snapshots: list[Snapshot] | None = None, limit: int = DEFAULT_HISTORY_LIMIT):
        if limit < 1:
            raise ValueError("History limit must be at least 1")
        self.limit = limit
        self._snapshots: list[Snapshot] = list(snapshots or [])[-limit:]

    def __len__(self) -> int:
        return len(self._snapshots)

    def __iter__(self) -> Iterator[Snapshot]:
        return iter(list(self._snapshots))

    @property
    def snapshots(self) -> list[Snapshot]:
        return list(self._snapshots)

    def add(self, snapshot: Snapshot) -> Snapshot:
        """Append a snapshot, evicting the oldest ones beyond the limit."""
        self._snapshots.append(snapshot)
        evicted = self._snapshots[: -self.limit]
        self._snapshots = self._snapshots[-self.limit :]
        for old in evicted:
            logger.debug("Evicted snapshot %s (%s)", old.id, old.name)
        return snapshot

    def get(self, snapshot_id: str) -> Snapshot:
        """Look up a snapshot by id.

        Raises:
            SnapshotNotFoundError: If no snapshot has this id
        """
        for snapshot in self._snapshots:
            if snapshot.id == snapshot_id:
                return snapshot
        raise SnapshotNotFoundError(snapshot_id)

    def remove(self, snapshot_id: str) -> Snapshot:
        """Delete a snapshot by id and return it.

        Raises:
            SnapshotNotFoundError: If no snapshot has this id
        """
        snapshot = self.get(snapshot_id)
        self._snapshots = [s for s in self._snapshots if s.id != snapshot_id]
        return snapshot

    # Persistence

    @classmethod
    def load(cls, path: Path, limit: int = DEFAULT_HISTORY_LIMIT) -> SnapshotHistory:
        """Load history from a JSON file. A missing file is an empty history.

        Raises:
            SnapshotError: If the file cannot be read or decoded
        """
        if not path.is_file():
            return cls(limit=limit)

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SnapshotError(f"Cannot read snapshot history {path}: {e}") from e

        try:
            snapshots = _SNAPSHOTS_ADAPTER.validate_json(text)
        except ValidationError as e:
            raise SnapshotError(f"Invalid snapshot history in {path}: {e}") from e

        return cls(snapshots, limit=limit)

    def save(self, path: Path) -> Path:
        """Write history to a JSON file, creating parent directories."""
        path.parent.mkdir(parents=True, exist_ok=True)
        data = _SNAPSHOTS_ADAPTER.dump_json(self._snapshots, by_alias=True, indent=2)
        path.write_bytes(data)
        return path
