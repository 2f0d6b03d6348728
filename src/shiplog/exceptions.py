"""Exception hierarchy for shiplog.

The parser, renderers and differ never raise for well-formed input.
These exceptions are raised at the boundaries: configuration loading,
reading release documents and working with the snapshot history.
"""

from __future__ import annotations


class ShiplogError(Exception):
    """Base exception for all shiplog errors."""


# Configuration


class ConfigError(ShiplogError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """pyproject.toml could not be found."""


class ConfigValidationError(ConfigError):
    """Configuration is present but invalid."""


# Release data


class ReleaseDataError(ShiplogError):
    """A release document could not be decoded into releases."""


# Snapshots


class SnapshotError(ShiplogError):
    """Snapshot history could not be read or written."""


class SnapshotNotFoundError(SnapshotError):
    """No snapshot exists with the requested id."""

    def __init__(self, snapshot_id: str) -> None:
        super().__init__(f"Snapshot not found: {snapshot_id}")
        self.snapshot_id = snapshot_id


# Export


class ExportError(ShiplogError):
    """Rendered output could not be produced."""


class UnknownFormatError(ExportError):
    """Requested export format is not supported."""

    def __init__(self, fmt: str) -> None:
        super().__init__(f"Unknown export format: {fmt!r}. Use markdown, json or html.")
        self.fmt = fmt
