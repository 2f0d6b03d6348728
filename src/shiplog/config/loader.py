"""Load shiplog configuration from pyproject.toml."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from shiplog.config.models import ShiplogConfig
from shiplog.exceptions import ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

TOOL_KEY = "shiplog"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml in ``start`` or any of its parents.

    Raises:
        ConfigNotFoundError: If no pyproject.toml exists up to the root
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Config file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_shiplog_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.shiplog]`` table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_KEY, {})


def load_config(path: Path | None = None) -> ShiplogConfig:
    """Load configuration for a project.

    Args:
        path: pyproject.toml file, or a directory to search from

    Returns:
        Validated configuration with relative paths anchored at the
        directory of pyproject.toml; defaults when no pyproject.toml or no
        ``[tool.shiplog]`` table exists

    Raises:
        ConfigValidationError: If the configuration is invalid
    """
    if path is not None and path.is_file():
        pyproject_path = path.resolve()
    else:
        try:
            pyproject_path = find_pyproject_toml(path)
        except ConfigNotFoundError:
            logger.debug("No pyproject.toml found, using default configuration")
            return ShiplogConfig()

    data = extract_shiplog_config(load_pyproject_toml(pyproject_path))

    try:
        config = ShiplogConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid [tool.{TOOL_KEY}] in {pyproject_path}: {e}") from e

    return config.resolve_paths(pyproject_path.parent)
