"""Configuration models for shiplog.

Configuration lives in the ``[tool.shiplog]`` table of pyproject.toml.
Every field has a default, so an absent table is a valid configuration.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from shiplog.core.history import DEFAULT_HISTORY_LIMIT
from shiplog.core.renderers import ExportFormat


class ExportConfig(BaseModel):
    """Settings for rendered output."""

    model_config = ConfigDict(extra="forbid")

    default_format: ExportFormat = ExportFormat.MARKDOWN
    output_dir: Path | None = None


class HistoryConfig(BaseModel):
    """Settings for the snapshot history file."""

    model_config = ConfigDict(extra="forbid")

    path: Path = Path(".shiplog/history.json")
    limit: int = Field(default=DEFAULT_HISTORY_LIMIT, ge=1)


class ShiplogConfig(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid")

    changelog_path: Path = Path("CHANGELOG.md")
    export: ExportConfig = Field(default_factory=ExportConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)

    def resolve_paths(self, root: Path) -> ShiplogConfig:
        """Return a copy with relative paths anchored at ``root``.

        Args:
            root: Directory of the pyproject.toml the configuration came from
        """
        return self.model_copy(
            update={
                "changelog_path": root / self.changelog_path,
                "export": self.export.model_copy(
                    update={
                        "output_dir": root / self.export.output_dir
                        if self.export.output_dir is not None
                        else None
                    }
                ),
                "history": self.history.model_copy(update={"path": root / self.history.path}),
            }
        )
